"""Link extraction from show-note HTML fragments.

Regex based. Callers only use extract_links() and extract_anchor_links(),
so the patterns can be swapped for a real HTML parser behind them.
"""

import html
import re
from typing import Dict, List

from ..models.episode import ExtractedLink


# <a href="URL">TEXT</a>, single or double quotes, other attributes allowed
ANCHOR_PATTERN = re.compile(
    r'<a\s+(?:[^>]*?\s+)?href=(["\'])(.*?)\1[^>]*>(.*?)</a>',
    re.IGNORECASE | re.DOTALL
)
TAG_PATTERN = re.compile(r'<[^>]*>')
BARE_URL_PATTERN = re.compile(r'https?://[^\s"\'<>]+')

EXCLUDED_SCHEMES = ("mailto:", "javascript:")


def strip_tags(fragment: str) -> str:
    """Remove markup, decode entities and trim."""
    return html.unescape(TAG_PATTERN.sub('', fragment)).strip()


def _is_excluded(url: str) -> bool:
    return url.strip().lower().startswith(EXCLUDED_SCHEMES)


def extract_links(content: str, include_bare_urls: bool = False) -> List[ExtractedLink]:
    """
    Extract links from an HTML fragment.
    
    Anchors come first in document order. With include_bare_urls, plain
    http(s) URLs not already captured by an anchor are appended with the
    URL as their text. Entries are unique by URL; the first one seen wins.
    
    Args:
        content: HTML fragment (may be empty)
        include_bare_urls: Also collect bare http(s) URLs
        
    Returns:
        List of ExtractedLink objects
    """
    if not content:
        return []
    
    links: Dict[str, ExtractedLink] = {}
    
    for match in ANCHOR_PATTERN.finditer(content):
        url = html.unescape(match.group(2)).strip()
        if not url or _is_excluded(url):
            continue
        if url in links:
            continue
        text = strip_tags(match.group(3)) or url
        links[url] = ExtractedLink(text=text, url=url, source="anchor")
    
    if include_bare_urls:
        for match in BARE_URL_PATTERN.finditer(content):
            url = html.unescape(match.group(0))
            if url not in links:
                links[url] = ExtractedLink(text=url, url=url, source="bare")
    
    return list(links.values())


def extract_anchor_links(content: str) -> List[ExtractedLink]:
    """Anchor-derived links only; this is the searchable link set."""
    return extract_links(content, include_bare_urls=False)
