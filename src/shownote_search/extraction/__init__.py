"""HTML fragment extraction: links and show-note sections."""

from .links import extract_anchor_links, extract_links, strip_tags
from .sections import Section, sectionize

__all__ = [
    "Section",
    "extract_anchor_links",
    "extract_links",
    "sectionize",
    "strip_tags",
]
