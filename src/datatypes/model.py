# src/datatypes/model.py
from __future__ import annotations

from typing import Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field

# tag name -> attribute name -> "uri" | "text", plus an optional "opts" entry such as {"max": 2}
AllowedTagSpec = Dict[str, Dict[str, Union[str, Dict[str, int]]]]

# XHTML void elements: no closing tag and no content.
VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "command", "embed", "hr", "img", "input",
    "keygen", "link", "meta", "param", "source", "track", "wbr",
})


class TextToken(BaseModel):
    """A run of literal text between two tags. May be empty."""
    model_config = ConfigDict(frozen=True)

    content: str = ""

    @property
    def source(self) -> str:
        return self.content


class TagToken(BaseModel):
    """A single tag occurrence, with the exact substring it was scanned from."""
    model_config = ConfigDict(frozen=True)

    name: str
    is_closing: bool = False
    raw_attrs: str = ""
    self_closing: bool = False
    source: str

    @property
    def is_void(self) -> bool:
        return self.name.lower() in VOID_ELEMENTS


Token = Union[TextToken, TagToken]


class ScannedDocument(BaseModel):
    """
    Tag tokens and the text runs around them.

    texts[i] precedes tags[i]; texts[-1] follows the last tag, so there is always
    exactly one more text run than there are tags.
    """
    model_config = ConfigDict(frozen=True)

    texts: List[str] = Field(default_factory=lambda: [""])
    tags: List[TagToken] = Field(default_factory=list)

    @property
    def has_tags(self) -> bool:
        return bool(self.tags)

    def tokens(self) -> List[Token]:
        """Returns the interleaved token stream in document order."""
        out: List[Token] = []
        for i, tag in enumerate(self.tags):
            out.append(TextToken(content=self.texts[i]))
            out.append(tag)
        out.append(TextToken(content=self.texts[-1]))
        return out

    def source(self) -> str:
        """Reassembles the document exactly as it was scanned."""
        return "".join(token.source for token in self.tokens())


class HtmlSettings(BaseModel):
    truncation_indicator: str = "..."
    encoding_fallback: str = "latin-1"
