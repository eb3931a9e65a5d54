from __future__ import annotations

import re
from typing import Dict, Optional

# name = "value" | name = 'value' | name = bareword
ATTRIBUTE_PATTERN = re.compile(r"([\w-]+)\s*=\s*(\"[^\"]*\"|'[^']*'|[^\"'\s>]*)")

# Control characters plus both quote characters.
_TRIM_CHARS = "".join(chr(i) for i in range(0x20)) + "'\""


class AttributeParseService:
    """Turns the raw attribute blob of a tag into an ordered name -> value map."""

    @staticmethod
    def parse(raw_attrs: str) -> Dict[str, str]:
        """
        Parses every name=value pair in raw_attrs.

        Attributes without a value are ignored. A repeated name keeps its first
        position but takes the last value.
        """
        attrs: Dict[str, str] = {}
        if not raw_attrs:
            return attrs
        for match in ATTRIBUTE_PATTERN.finditer(raw_attrs):
            attrs[match.group(1).strip()] = match.group(2).strip(_TRIM_CHARS)
        return attrs

    @staticmethod
    def lookup(attrs: Dict[str, str], name: str, default: Optional[str] = None) -> Optional[str]:
        """Case-insensitive attribute lookup; an exact-case key wins."""
        if name in attrs:
            return attrs[name]
        lowered = name.lower()
        for key, value in attrs.items():
            if key.lower() == lowered:
                return value
        return default
