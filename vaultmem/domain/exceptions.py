"""Domain-layer exceptions.

These keep the domain layer free of HTTP awareness. Global exception
handlers in main.py map them to the appropriate HTTP status codes.
The scoring algorithms never raise these; they belong to the index
and persistence collaborators.
"""


class EntityNotFoundError(Exception):
    """Entity not found. Maps to HTTP 404."""

    def __init__(self, entity: str, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        msg = f"{entity} {entity_id} not found" if entity_id else f"{entity} not found"
        super().__init__(msg)


class DomainValidationError(Exception):
    """Business-rule validation failure. Maps to HTTP 400."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)
