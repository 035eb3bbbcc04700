"""Memory context utilities."""

from vaultmem.utils.memory_context.formatter import (
    format_memory_entry,
    format_memory_summary,
    inject_memories_into_context,
)
from vaultmem.utils.memory_context.markdown import (
    parse_memory_sections,
    session_memory_from_markdown,
)

__all__ = [
    "format_memory_entry",
    "format_memory_summary",
    "inject_memories_into_context",
    "parse_memory_sections",
    "session_memory_from_markdown",
]
