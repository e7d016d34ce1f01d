"""Heading-based section slicing for markdown curriculum files.

Pure functions over a line-indexed document, shared by ``open_file`` and
``copy_section``.

Algorithm:
    1. The section starts at the first line whose lowercased text contains
       the lowercased heading (or equals it after trimming).  First match
       wins; there is no fuzzy fallback.
    2. It ends just before the next top-level heading (`#` or `##`, or only
       `#` when the section itself starts at `#`), or at end of document.
       `###` and deeper headings stay inside the section, including when the
       section starts at one.  A start line that is not a heading counts as
       level 2.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_HEADING_RE = re.compile(r"^(#{1,6})(?=\s|$)")

# A match on a non-heading line (e.g. "**Exit Ticket**:") behaves like a
# top-level section.  Subsections never end at a sibling subsection.
DEFAULT_SECTION_LEVEL = 2
BOUNDARY_LEVEL = 2


@dataclass(frozen=True)
class Section:
    """A located section: ``lines[start:end]`` of the source document."""

    start: int
    end: int
    level: int
    text: str


def heading_level(line: str) -> int:
    """Return the markdown heading level of *line* (1–6), or 0 if not a heading."""
    match = _HEADING_RE.match(line)
    return len(match.group(1)) if match else 0


def find_heading_line(lines: list[str], heading: str) -> int:
    """Index of the first line matching *heading*, or -1."""
    needle = heading.strip().lower()
    if not needle:
        return -1
    for idx, line in enumerate(lines):
        lowered = line.lower()
        if needle in lowered or lowered.strip() == needle:
            return idx
    return -1


def find_section(lines: list[str], heading: str) -> Section | None:
    """Locate the section introduced by *heading* in a line-split document."""
    start = find_heading_line(lines, heading)
    if start == -1:
        return None

    level = min(heading_level(lines[start]) or DEFAULT_SECTION_LEVEL, BOUNDARY_LEVEL)
    end = len(lines)
    for idx in range(start + 1, len(lines)):
        other = heading_level(lines[idx])
        if other and other <= level:
            end = idx
            break

    return Section(
        start=start,
        end=end,
        level=level,
        text="\n".join(lines[start:end]),
    )


def extract_section(content: str, heading: str) -> str | None:
    """Return the text of the section introduced by *heading*, or None."""
    section = find_section(content.split("\n"), heading)
    return section.text if section else None
