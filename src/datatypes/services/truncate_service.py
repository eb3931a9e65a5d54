# src/datatypes/services/truncate_service.py
from __future__ import annotations

import logging
from typing import List, Optional, Union

from datatypes.managers.config_manager import config_manager
from datatypes.model import HtmlSettings
from datatypes.services.tag_balance_service import TagBalanceService
from datatypes.services.tag_scan_service import TagScanService
from datatypes.utils.encoding import to_unicode
from datatypes.utils.entities import escape, unescape

logger = logging.getLogger(__name__)


class TruncateService:
    """
    HTML-safe truncation to a number of visible characters.

    Tag markup does not count towards the length; text is measured in Unicode
    code points. Tags before the cut are kept and, optionally, left-open tags
    are closed afterwards.
    """

    def __init__(self, indicator: Optional[str] = None, encoding_fallback: Optional[str] = None):
        settings = HtmlSettings(**config_manager.get_nested("html", {}))
        self.indicator = settings.truncation_indicator if indicator is None else indicator
        self.encoding_fallback = encoding_fallback or settings.encoding_fallback

    def truncate(self, html: Union[str, bytes], length: int, close_unclosed: bool = True) -> str:
        """
        Truncates html to length visible characters and appends the indicator.

        Args:
            html: The document. Bytes are decoded with encoding detection.
            length: Visible characters to keep. Zero or less keeps none, so the
                result is the indicator alone (plus closing tags).
            close_unclosed: Append closing tags for tags left open by the cut.

        Returns:
            str: The truncated document, or the input unchanged if it already fits.
        """
        html = to_unicode(html, self.encoding_fallback)
        length = max(int(length), 0)
        doc = TagScanService.split(html)

        if not doc.has_tags:
            if len(html) <= length:
                return html
            return html[:length] + self.indicator

        # Entities count at their literal length here.
        if sum(len(text) for text in doc.texts) <= length:
            return html

        kept: List[str] = []
        count = 0
        cut = False
        for text in doc.texts:
            decoded = unescape(text)
            if count + len(decoded) >= length:
                kept.append(escape(decoded[:length - count], quote=False))
                cut = True
                break
            kept.append(escape(decoded, quote=False))
            count += len(decoded)

        if not cut:
            # Only entity decoding made it fit.
            return html

        # A tag goes in front of the text run that followed it.
        parts = [kept[0]]
        for i in range(1, len(kept)):
            parts.append(doc.tags[i - 1].source + kept[i])
        truncated = "".join(parts) + self.indicator

        if close_unclosed:
            truncated = TagBalanceService.close_unbalanced(truncated, doc.tags[:len(kept) - 1])

        logger.debug("Truncated HTML to %d visible characters.", length)
        return truncated
