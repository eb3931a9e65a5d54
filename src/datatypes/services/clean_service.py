# src/datatypes/services/clean_service.py
from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, List, MutableMapping, Optional

from datatypes.model import VOID_ELEMENTS, AllowedTagSpec, TagToken
from datatypes.services.attribute_parse_service import AttributeParseService
from datatypes.services.tag_balance_service import TagBalanceService
from datatypes.services.tag_scan_service import TagScanService
from datatypes.utils.entities import escape, escape_text
from datatypes.utils.url_utils import UrlUtils

logger = logging.getLogger(__name__)

OPTS_KEY = "opts"
URI_KIND = "uri"


def default_allowed_tags() -> AllowedTagSpec:
    """Returns a fresh copy of the built-in allow-list of safe tags."""
    return {
        "strong": {},
        "em": {},
        "b": {},
        "u": {},
        "i": {},
        "a": {"href": "uri"},
        "p": {},
        "br": {},
        "ul": {},
        "li": {},
        "hr": {},
        "img": {"src": "uri", "alt": "text", "title": "text"},
        "h1": {},
        "h2": {},
        "h3": {},
        "h4": {},
        "h5": {},
    }


def _occurrence_cap(tag_spec: Dict) -> Optional[int]:
    opts = tag_spec.get(OPTS_KEY)
    if isinstance(opts, dict) and opts.get("max") is not None:
        return int(opts["max"])
    return None


class CleanService:
    """
    Rewrites HTML down to an allow-list of tags and attributes.

    Disallowed tags are dropped (their text content stays), allowed tags are
    re-emitted with only their allow-listed attributes, URI attributes are made
    absolute against the source URL, and missing closing tags are appended.
    """

    def __init__(
            self,
            allowed_tags: Optional[AllowedTagSpec] = None,
            source_url: Optional[str] = None,
            url_cache: Optional[MutableMapping[str, str]] = None,
    ):
        """
        Args:
            allowed_tags: The allow-list. None selects default_allowed_tags(); an
                empty mapping allows nothing. Never modified by clean().
            source_url: URL the HTML was found at, used to resolve relative URIs.
                Ignored unless it is a valid absolute URL.
            url_cache: Optional shared memo of raw attribute value -> resolved URL.
                Without one, every clean() call uses a fresh cache. A shared cache
                must only be reused with the same source_url.
        """
        self.allowed_tags = allowed_tags
        self.source_url = source_url if UrlUtils.is_absolute(source_url) else None
        self.url_cache = url_cache

    def clean(self, html: str) -> str:
        """Returns html reduced to the allow-list. Never raises."""
        doc = TagScanService.split(html)
        if not doc.has_tags:
            return escape(html)

        # Pass-local copy: occurrence caps remove entries from it.
        allowed: AllowedTagSpec = dict(
            default_allowed_tags() if self.allowed_tags is None else self.allowed_tags
        )
        url_cache = self.url_cache if self.url_cache is not None else {}

        counts: Counter = Counter()
        kept: List[TagToken] = []
        parts: List[str] = []

        for i, tag in enumerate(doc.tags):
            name = tag.name if tag.name in allowed else tag.name.lower()
            markup = ""

            if name not in allowed:
                logger.debug("Dropping disallowed tag: %s", tag.source)
            elif tag.is_closing:
                # Closing tags of void elements are swallowed.
                if name.lower() not in VOID_ELEMENTS:
                    markup = f"</{name}>"
                    kept.append(tag.model_copy(update={"name": name}))
            else:
                tag_spec = allowed[name]
                cap = _occurrence_cap(tag_spec)
                if cap is not None and counts[name] >= cap:
                    logger.debug("Tag '%s' reached its cap of %d; dropping it for the rest of this pass.", name, cap)
                    del allowed[name]
                else:
                    markup = self._rewrite_tag(tag, name, tag_spec, url_cache)
                    counts[name] += 1
                    kept.append(tag.model_copy(update={"name": name}))

            parts.append(escape_text(doc.texts[i]) + markup)

        # The trailing text run is appended as-is, without escaping.
        parts.append(doc.texts[-1])

        cleaned = TagBalanceService.close_unbalanced("".join(parts), kept)
        return cleaned.strip()

    def _rewrite_tag(self, tag: TagToken, name: str, tag_spec: Dict, url_cache: MutableMapping[str, str]) -> str:
        """Re-emits an opening tag with only its allow-listed attributes."""
        attrs = AttributeParseService.parse(tag.raw_attrs)
        markup = "<" + name

        for attr, kind in tag_spec.items():
            if attr == OPTS_KEY:
                continue
            value = AttributeParseService.lookup(attrs, attr)
            if value is None:
                continue

            if kind == URI_KIND:
                value = self._resolve_uri(value, url_cache)
            markup += f' {attr}="{escape(value)}"'

        if name.lower() in VOID_ELEMENTS:
            markup += "/"
        return markup + ">"

    def _resolve_uri(self, value: str, url_cache: MutableMapping[str, str]) -> str:
        # Fix spaces in URLs.
        value = value.replace(" ", "+")
        if value not in url_cache:
            url_cache[value] = (
                value if UrlUtils.is_absolute(value)
                else UrlUtils.make_absolute(value, self.source_url, True)
            )
        return url_cache[value]
