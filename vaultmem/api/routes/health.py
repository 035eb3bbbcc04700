from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from vaultmem.api.deps import get_memory_index
from vaultmem.domain.memory_index import MemoryIndex

router = APIRouter()


@router.get("/health")
async def health_check(index: MemoryIndex = Depends(get_memory_index)):
    """
    Full health check endpoint.

    Verifies application status and that the memory index answers queries.

    Returns:
        dict: Health status with timestamp and index check
    """
    try:
        indexed = len(index.get_all_entries())
        index_status = "ok"
    except Exception as e:
        indexed = 0
        index_status = f"error: {str(e)}"

    return {
        "status": "healthy" if index_status == "ok" else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {
            "memory_index": index_status,
            "indexed_memories": indexed,
        }
    }


@router.get("/healthz")
async def healthz():
    """
    Simple liveness probe.

    Returns:
        dict: Simple status indicator
    """
    return {"status": "healthy"}
