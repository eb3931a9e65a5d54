# src/datatypes/text.py
from __future__ import annotations

import json
import re
import zlib
from typing import Any, Dict, List, Union

from bs4 import BeautifulSoup

from datatypes.base import Base
from datatypes.utils.encoding import to_unicode
from datatypes.utils.entities import escape, escape_all, unescape

HASHTAG_RE = re.compile(r"(#[a-z0-9]+)", re.IGNORECASE)
HASHTAG_MIN_SEARCH_LENGTH = 6
MAX_COLOR_INTENSITY = 200
RESERVED_SLUGS = ("me", "type")

# Whitespace plus every ASCII control character.
_WHITESPACE_RE = re.compile(r"[\x00-\x1f ]+")
_NUMERIC_RE = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


class Text(Base):
    """A plain-text string with helpers for display and search."""

    def __init__(self, value: Any = ""):
        super().__init__(to_unicode(value) if isinstance(value, (bytes, bytearray)) else str(value))

    def extract_hashtags(self, pad_for_ft_search: bool = False) -> List[str]:
        """
        Returns every #hashtag, lower-cased, in order of appearance (duplicates kept).

        With pad_for_ft_search, short tags are right-padded with "-" to the
        minimum word length of a full-text index.
        """
        tags = [tag.lower() for tag in HASHTAG_RE.findall(self._val)]
        if pad_for_ft_search:
            return [tag.ljust(HASHTAG_MIN_SEARCH_LENGTH, "-") for tag in tags]
        return tags

    def sanitize(self, strip_tags: bool = True) -> str:
        if not _NUMERIC_RE.match(self._val):
            if strip_tags:
                text = BeautifulSoup(self._val, "html.parser").get_text()
                self._val = escape(text)
            else:
                self._val = escape_all(self._val)
        return self._val

    def truncate(self, length: int) -> str:
        """Decodes entities, then cuts to length characters and appends "..." if anything was cut."""
        self._val = unescape(self._val)
        if len(self._val) > length:
            self._val = self._val[:max(length, 0)] + "..."
        return self._val

    def remove_whitespace(self) -> str:
        self._val = _WHITESPACE_RE.sub("", self._val)
        return self._val

    def generate_color(self, hex: bool = False) -> Union[Dict[str, int], str]:
        """
        Derives a stable RGB color from the text, for avatars and labels.

        Every channel is capped at MAX_COLOR_INTENSITY so white text stays readable.
        """
        digits = str(zlib.crc32(self._val.encode("utf-8")))[:9].ljust(9, "5")
        # Interleave the digits so similar strings spread across channels.
        shuffled = digits[0::3] + digits[1::3] + digits[2::3]

        def channel(chunk: str) -> int:
            return min(int(round(int(chunk) / 1000 * 255)), MAX_COLOR_INTENSITY)

        color = {
            "r": channel(shuffled[3:6]),
            "g": channel(shuffled[0:3]),
            "b": channel(shuffled[6:9]),
        }
        if hex:
            return "".join(f"{color[c]:02x}" for c in ("r", "g", "b"))
        return color

    @staticmethod
    def make_slug(s: str) -> str:
        """Turns a display name into a lower-case, underscore-separated slug."""
        if s in RESERVED_SLUGS:
            s += "_1"
        # "CNN.com" should become "cnn", not "cnncom".
        s = re.sub(r"\.com|\.org|\.net ", "", s, flags=re.IGNORECASE)
        s = re.sub(r"['\".]+", "", s)
        s = re.sub(r"[^a-z0-9]+", "_", s, flags=re.IGNORECASE)
        return s.lower().strip("_")

    @staticmethod
    def force_unicode(value: Union[str, bytes, None]) -> str:
        return to_unicode(value)

    @staticmethod
    def force_unicode_mapping(mapping: Dict) -> Dict:
        """Recursively decodes every byte-string key and value of a mapping."""
        out: Dict = {}
        for key, value in mapping.items():
            if isinstance(key, (bytes, bytearray)):
                key = to_unicode(key)
            if isinstance(value, dict):
                value = Text.force_unicode_mapping(value)
            elif isinstance(value, (bytes, bytearray)):
                value = to_unicode(value)
            out[key] = value
        return out

    @staticmethod
    def unicode_safe_serialize(value: Any) -> str:
        if isinstance(value, dict):
            value = Text.force_unicode_mapping(value)
        elif isinstance(value, (bytes, bytearray)):
            value = to_unicode(value)
        return json.dumps(value, ensure_ascii=False)
