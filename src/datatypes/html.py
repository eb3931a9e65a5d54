# src/datatypes/html.py
from __future__ import annotations

import logging
from typing import Dict, FrozenSet, List, MutableMapping, Optional, Union

from datatypes.base import Base
from datatypes.managers.config_manager import config_manager
from datatypes.model import VOID_ELEMENTS, AllowedTagSpec, HtmlSettings
from datatypes.services.clean_service import CleanService, default_allowed_tags
from datatypes.services.tag_balance_service import TagBalanceService
from datatypes.services.tag_extract_service import TagExtractService
from datatypes.services.tag_scan_service import TagScanService
from datatypes.services.truncate_service import TruncateService
from datatypes.utils.encoding import to_unicode
from datatypes.utils.entities import escape, unescape
from datatypes.utils.url_utils import UrlUtils

logger = logging.getLogger(__name__)


class Html(Base):
    """
    An HTML string plus the URL it was found at.

    The mutating operations (close_tags, truncate, clean) replace the held
    document and also return it, so calls can be chained through val().
    """

    def __init__(self, html: Union[str, bytes, None], source_url: Optional[str] = None):
        settings = HtmlSettings(**config_manager.get_nested("html", {}))
        super().__init__(to_unicode(html, settings.encoding_fallback))
        if source_url is not None and not UrlUtils.is_absolute(source_url):
            logger.debug(f"Discarding invalid source URL: {source_url}")
            source_url = None
        self._source_url = source_url

    @property
    def source_url(self) -> Optional[str]:
        return self._source_url

    @staticmethod
    def get_void_elements() -> FrozenSet[str]:
        return VOID_ELEMENTS

    @staticmethod
    def get_allowed_tags() -> AllowedTagSpec:
        return default_allowed_tags()

    @staticmethod
    def escape_html(text: str) -> str:
        return escape(text)

    @staticmethod
    def unescape_html(text: str) -> str:
        return unescape(text)

    def close_tags(self) -> str:
        """Appends closing tags for every tag left open in the document."""
        doc = TagScanService.split(self._val)
        self._val = TagBalanceService.close_unbalanced(self._val, doc.tags)
        return self._val

    def truncate(self, length: int, close_unclosed: bool = True) -> str:
        self._val = TruncateService().truncate(self._val, length, close_unclosed)
        return self._val

    def clean(
            self,
            allowed: Optional[AllowedTagSpec] = None,
            url_cache: Optional[MutableMapping[str, str]] = None,
    ) -> str:
        """
        Reduces the document to safe markup.

        Args:
            allowed: Allow-list of tag -> attribute -> "uri"/"text". None uses
                get_allowed_tags(); an empty mapping strips every tag.
            url_cache: Optional memo of resolved URLs, shared across calls made
                with the same source URL.
        """
        self._val = CleanService(allowed, self._source_url, url_cache).clean(self._val)
        return self._val

    def extract_tag(self, tag: str) -> List[Dict]:
        return self._extractor().extract_tag(tag)

    def extract_images(self) -> List[str]:
        return self._extractor().extract_images()

    def extract_metatags(self) -> Dict:
        return self._extractor().extract_metatags()

    def extract_rssfeeds(self) -> List[Dict[str, str]]:
        return self._extractor().extract_rssfeeds()

    def extract_opengraph(self) -> Dict[str, str]:
        return self._extractor().extract_opengraph()

    def _extractor(self) -> TagExtractService:
        return TagExtractService(self._val, self._source_url)
