"""
Memory Context Formatter

Renders loaded memories into a prompt-context block that is prepended to
a new session's context.
"""

from typing import List, Sequence

from vaultmem.models.memories import MemoryIndexEntry

CONTEXT_HEADER = "=== CONTEXT FROM PREVIOUS SESSIONS ==="
CONTEXT_FOOTER = "=" * 42


def format_memory_entry(entry: MemoryIndexEntry) -> str:
    """One-block rendering of an indexed memory."""
    lines = [f"{entry.node_name} · {entry.timestamp.date().isoformat()}"]
    if entry.command:
        lines.append(f"Command: {entry.command}")
    if entry.summary:
        lines.append(f"Summary: {entry.summary}")
    if entry.tags:
        lines.append(f"Tags: {', '.join(entry.tags)}")
    return "\n".join(lines)


def inject_memories_into_context(base_context: str, memories: Sequence[str]) -> str:
    """
    Prepend previous-session memories to a context string.

    Returns base_context unchanged when there is nothing to inject.
    """
    if not memories:
        return base_context

    blocks: List[str] = [
        f"[Session {i}]\n{memory}" for i, memory in enumerate(memories, start=1)
    ]
    section = f"{CONTEXT_HEADER}\n\n" + "\n---\n".join(blocks) + f"\n\n{CONTEXT_FOOTER}\n\n"
    return section + (base_context or "")


def format_memory_summary(count: int) -> str:
    """Log line describing how many memories were injected."""
    noun = "memory" if count == 1 else "memories"
    return f"Loaded {count} past session {noun} for context"
