"""
Memory Markdown Parser

Maps the "## Section" headings of a memory.md file onto SessionMemory
text sections, so hosts that store memories as markdown can feed the
quality scorer. Reading the file is the host's job; this only parses text.
"""

from typing import Dict, Optional

from vaultmem.models.memories import MemoryIndexEntry, SessionMemory

SECTION_HEADINGS: Dict[str, str] = {
    "current state": "current_state",
    "task specification": "task_spec",
    "workflow": "workflow",
    "errors": "errors",
    "learnings": "learnings",
    "key results": "key_results",
}


def parse_memory_sections(content: str) -> Dict[str, str]:
    """
    Extract known sections from memory markdown.

    Unknown headings are skipped; their body is not attributed to the
    previous section. The first "# Title" line, if any, becomes "title".
    """
    sections: Dict[str, str] = {}
    current_key: Optional[str] = None
    in_section = False
    buffer: list[str] = []

    def flush() -> None:
        if current_key is not None:
            sections[current_key] = "\n".join(buffer).strip()

    for line in content.splitlines():
        if line.startswith("## "):
            flush()
            heading = line[3:].strip().lower()
            current_key = SECTION_HEADINGS.get(heading)
            in_section = True
            buffer = []
        elif line.startswith("# ") and not in_section and "title" not in sections:
            sections["title"] = line[2:].strip()
        elif current_key is not None:
            buffer.append(line)

    flush()
    return sections


def session_memory_from_markdown(entry: MemoryIndexEntry, content: str) -> SessionMemory:
    """
    Build a full SessionMemory from an index entry plus its markdown body.

    Only the body supplies text sections; the entry summary is never
    reused as a title, so an empty body scores zero completeness.
    """
    sections = parse_memory_sections(content)
    return SessionMemory(
        session_id=entry.session_id,
        node_id=entry.node_id,
        node_name=entry.node_name,
        timestamp=entry.timestamp,
        command=entry.command,
        summary=entry.summary,
        tags=entry.tags,
        **sections,
    )
