"""Splits an episode description into titled show-note sections."""

import re
from dataclasses import dataclass
from typing import List, Optional

from .links import strip_tags


HEADING_OPEN_PATTERN = re.compile(r'<h2(?:\s[^>]*)?>', re.IGNORECASE)
HEADING_CLOSE_PATTERN = re.compile(r'</h2\s*>', re.IGNORECASE)
TIMESTAMP_PATTERN = re.compile(r'(?<!\d)(\d{1,2}:\d{2}:\d{2})(?!\d)')


@dataclass
class Section:
    """A show note before it is stored."""
    
    title: str
    content: str
    timestamp: Optional[str] = None


def find_timestamp(content: str) -> Optional[str]:
    """Return the first H:MM:SS / HH:MM:SS token in content, if any."""
    match = TIMESTAMP_PATTERN.search(content or "")
    return match.group(1) if match else None


def sectionize(description: str) -> List[Section]:
    """
    Split description HTML on <h2> headings.
    
    Whatever precedes the first heading is dropped. Fragments that are blank
    or carry no closing </h2> (so no title) are skipped.
    
    Args:
        description: Raw episode description HTML
        
    Returns:
        Sections in order of appearance
    """
    if not description:
        return []
    
    fragments = HEADING_OPEN_PATTERN.split(description)
    sections = []
    
    for fragment in fragments[1:]:
        if not fragment.strip():
            continue
        
        parts = HEADING_CLOSE_PATTERN.split(fragment, maxsplit=1)
        if len(parts) < 2:
            continue
        
        title = strip_tags(parts[0])
        if not title:
            continue
        
        content = parts[1].strip()
        sections.append(Section(
            title=title,
            content=content,
            timestamp=find_timestamp(content)
        ))
    
    return sections
