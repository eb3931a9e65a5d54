# src/datatypes/services/tag_scan_service.py
from __future__ import annotations

import re
from typing import List

from datatypes.model import ScannedDocument, TagToken, Token

# General tag grammar: "<", optional "/", a tag name, any number of bare or
# valued attributes, optional trailing "/", ">".
TAG_PATTERN = re.compile(
    r"<(?P<closing>/?)(?P<name>\w+)"
    r"(?P<attrs>(?:\s+[\w-]+(?:\s*=\s*(?:\"[^\"]*\"|'[^']*'|[^'\">\s]+))?)*)"
    r"\s*/?>",
    re.IGNORECASE,
)


class TagScanService:
    """
    Splits an HTML string into text runs and tag tokens in a single pass.

    This is a best-effort scanner, not a validator: any string is accepted, and
    a stray "<" or ">" that does not form a tag simply stays in the text run.
    """

    @staticmethod
    def split(html: str) -> ScannedDocument:
        """
        Scans html into parallel text and tag lists.

        Args:
            html (str): The document to scan.

        Returns:
            ScannedDocument: texts[i] precedes tags[i], texts[-1] trails the last tag.
        """
        texts: List[str] = []
        tags: List[TagToken] = []
        position = 0

        for match in TAG_PATTERN.finditer(html or ""):
            texts.append(html[position:match.start()])
            source = match.group(0)
            tags.append(TagToken(
                name=match.group("name"),
                is_closing=bool(match.group("closing")),
                raw_attrs=match.group("attrs"),
                self_closing=source.endswith("/>"),
                source=source,
            ))
            position = match.end()

        texts.append((html or "")[position:])
        return ScannedDocument(texts=texts, tags=tags)

    @staticmethod
    def scan(html: str) -> List[Token]:
        """Returns the interleaved Text/Tag token stream for html."""
        return TagScanService.split(html).tokens()
