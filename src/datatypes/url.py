# src/datatypes/url.py
from __future__ import annotations

import logging
import re
from typing import Dict, Mapping, Optional, Union
from urllib.parse import parse_qsl, urlencode, urlsplit

from datatypes.base import Base
from datatypes.exceptions import DatatypeError
from datatypes.utils.url_utils import UrlUtils

logger = logging.getLogger(__name__)

CSRF_TOKEN_KEY = "CSRF_TOK"
_DOMAIN_RE = re.compile(r"(?:http|https)://(?:www\.)?([^/]+)/?", re.IGNORECASE)


class Url(Base):
    """
    A validated absolute URL, split into its parts so the query string can be edited.

    Raises:
        DatatypeError: (code 400) if the value is not an absolute URL.
    """

    def __init__(self, url: str):
        if not UrlUtils.is_absolute(url):
            raise DatatypeError("Bad URL passed to URL datatype.", code=400, value=url)
        super().__init__(url)

        parsed = urlsplit(url)
        self.scheme: str = parsed.scheme or "http"
        self.user: Optional[str] = parsed.username
        self.password: Optional[str] = parsed.password
        self.port: Optional[int] = parsed.port
        self.path: str = parsed.path
        self.query: Dict[str, str] = dict(parse_qsl(parsed.query, keep_blank_values=True))

        # Host as written (urlsplit lower-cases hostname), IPv6 brackets included.
        host = parsed.netloc.rsplit("@", 1)[-1]
        if parsed.port is not None:
            host = host.rsplit(":", 1)[0]
        self.host: str = host

    def val(self) -> str:
        out = f"{self.scheme}://"
        if self.user is not None:
            out += self.user
            if self.password is not None:
                out += f":{self.password}"
            out += "@"
        out += self.host
        if self.port is not None:
            out += f":{self.port}"
        out += self.path
        if self.query:
            out += "?" + urlencode(self.query)
        return out

    def add_query(self, query: Union[str, Mapping[str, str]]) -> None:
        """Merges "k=v&k2=v2" or a mapping into the query; existing keys are overwritten in place."""
        if isinstance(query, str):
            query = dict(parse_qsl(query, keep_blank_values=True))
        if not isinstance(query, Mapping):
            raise DatatypeError("Bad query string passed to add_query.", code=400, value=query)
        self.query.update({str(key): str(value) for key, value in query.items()})

    def remove_query(self, key: str) -> None:
        self.query.pop(key, None)

    def add_csrf_token(self, token: str) -> None:
        self.add_query({CSRF_TOKEN_KEY: token or ""})

    def get_domain(self, include_subdomains: bool = True) -> str:
        """
        Returns the host without a leading "www.".

        With include_subdomains=False only the last two labels are kept
        (one.two.example.com -> example.com).
        """
        match = _DOMAIN_RE.search(self.val())
        domain = match.group(1) if match else ""
        if not include_subdomains:
            return ".".join(domain.split(".")[-2:])
        return domain

    @staticmethod
    def validate(value) -> bool:
        return UrlUtils.is_absolute(value)

    @staticmethod
    def make_absolute(url: str, base_url: Optional[str] = None, base_is_validated: bool = False) -> str:
        return UrlUtils.make_absolute(url, base_url, base_is_validated)

    @staticmethod
    def normalize(uri: str, xri: bool = False) -> Optional[str]:
        return UrlUtils.normalize(uri, xri)

    @staticmethod
    def get_clean_url(url: str) -> str:
        return UrlUtils.get_clean_url(url)
