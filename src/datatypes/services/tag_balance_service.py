# src/datatypes/services/tag_balance_service.py
from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, Iterable, List

from datatypes.model import VOID_ELEMENTS, TagToken

logger = logging.getLogger(__name__)


class TagBalanceService:
    """
    Computes the closing tags needed to balance a document.

    Balancing works on aggregate counts per tag name, not on a stack of open
    instances. Simple nesting recovers correctly; interleaved same-named tags at
    different depths (e.g. <b><i></b></i>) may not.
    """

    @staticmethod
    def closing_tags(tags: Iterable[TagToken]) -> List[str]:
        """
        Returns the owed closing tags in the order they should be appended.

        Names are compared case-insensitively and emitted in the case of their
        first opening occurrence. The tag opened first is closed last.
        """
        opened: Counter = Counter()
        closed: Counter = Counter()
        display: Dict[str, str] = {}

        for tag in tags:
            key = tag.name.lower()
            if key in VOID_ELEMENTS:
                continue
            if tag.is_closing:
                closed[key] += 1
            else:
                opened[key] += 1
                display.setdefault(key, tag.name)

        out: List[str] = []
        # display keeps first-appearance order; reversing it nests the closers.
        for key in reversed(list(display)):
            owed = opened[key] - closed[key]
            if owed > 0:
                out.extend([f"</{display[key]}>"] * owed)

        if out:
            logger.debug("Closing %d unbalanced tag(s): %s", len(out), "".join(out))
        return out

    @staticmethod
    def close_unbalanced(html: str, tags: Iterable[TagToken]) -> str:
        """Appends the owed closing tags for tags to html."""
        return html + "".join(TagBalanceService.closing_tags(tags))
