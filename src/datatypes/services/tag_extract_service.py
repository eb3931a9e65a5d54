# src/datatypes/services/tag_extract_service.py
from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional

from datatypes.services.attribute_parse_service import AttributeParseService
from datatypes.utils.url_utils import UrlUtils

logger = logging.getLogger(__name__)

RSS_FEED_TYPES = ("application/xml", "application/rss+xml", "application/atom+xml", "text/xml")

# Attribute blob: quoted values may contain ">", anything else stops at it.
_ATTRS = r"((?:\"[^\"]*\"|'[^']*'|[^\"'>])*?)"


def _tag_patterns(tag: str) -> List[re.Pattern]:
    """Builds the three extraction passes for a tag, in the order they must run."""
    name = re.escape(tag)
    return [
        # <tag ... />
        re.compile(rf"<\s*{name}\b{_ATTRS}\s*/>", re.IGNORECASE),
        # <tag ...>content</tag>
        re.compile(rf"<\s*{name}\b([^>]*)>(.*?)<\s*/\s*{name}\s*>", re.IGNORECASE),
        # <tag ...>
        re.compile(rf"<\s*{name}\b{_ATTRS}\s*>", re.IGNORECASE),
    ]


class TagExtractService:
    """Pulls tag occurrences and well-known metadata out of an HTML document."""

    def __init__(self, html: str, source_url: Optional[str] = None):
        self.html = html or ""
        self.source_url = source_url if UrlUtils.is_absolute(source_url) else None

    def extract_tag(self, tag: str) -> List[Dict]:
        """
        Finds every occurrence of a tag.

        Returns:
            List[Dict]: One {"attrs": {...}, "content": str} per occurrence. Content
            is the trimmed inner markup, or "" for tags without a closing tag.
        """
        results: List[Dict] = []
        if not tag:
            return results

        working = self.html
        for pattern in _tag_patterns(tag):
            matches = list(pattern.finditer(working))
            for match in matches:
                raw_attrs = match.group(1)
                content = match.group(2) if pattern.groups > 1 else None
                results.append({
                    "attrs": AttributeParseService.parse(raw_attrs) if raw_attrs else {},
                    "content": content.strip() if content else "",
                })
            # Remove this pass's matches so later passes do not report them again.
            for match in matches:
                working = working.replace(match.group(0), "")

        logger.debug("Extracted %d <%s> tag(s).", len(results), tag)
        return results

    def extract_images(self) -> List[str]:
        """Returns the src of every img tag, absolute when a source URL is known, without duplicates."""
        images: Dict[str, None] = {}
        for image in self.extract_tag("img"):
            src = AttributeParseService.lookup(image["attrs"], "src")
            if not src:
                continue
            if self.source_url:
                src = UrlUtils.make_absolute(src, self.source_url)
            images.setdefault(src, None)
        return list(images)

    def extract_metatags(self) -> Dict:
        """Returns meta name/http-equiv -> content, plus link rel -> href under the "link" key."""
        output: Dict = {}
        for meta in self.extract_tag("meta"):
            attrs = meta["attrs"]
            content = AttributeParseService.lookup(attrs, "content")
            name = AttributeParseService.lookup(attrs, "name")
            http_equiv = AttributeParseService.lookup(attrs, "http-equiv")
            if not content or not (name or http_equiv):
                continue
            if name:
                output[name] = content
            if http_equiv:
                output[http_equiv] = content

        for link in self.extract_tag("link"):
            rel = AttributeParseService.lookup(link["attrs"], "rel")
            href = AttributeParseService.lookup(link["attrs"], "href")
            if not rel or not href:
                continue
            output.setdefault("link", {})[rel] = href

        return output

    def extract_rssfeeds(self) -> List[Dict[str, str]]:
        """Returns the attribute maps of feed link tags, one per distinct href."""
        feeds: Dict[str, Dict[str, str]] = {}
        for link in self.extract_tag("link"):
            feed_type = AttributeParseService.lookup(link["attrs"], "type")
            href = AttributeParseService.lookup(link["attrs"], "href")
            if not feed_type or not href:
                continue
            if feed_type in RSS_FEED_TYPES:
                # A repeated href keeps its first position but takes the later attributes.
                feeds[href] = link["attrs"]
        return list(feeds.values())

    def extract_opengraph(self) -> Dict[str, str]:
        output: Dict[str, str] = {}
        for meta in self.extract_tag("meta"):
            prop = AttributeParseService.lookup(meta["attrs"], "property")
            content = AttributeParseService.lookup(meta["attrs"], "content")
            if not prop or not content or not prop.startswith("og:"):
                continue
            output[prop[3:]] = content
        return output
