# src/datatypes/utils/url_utils.py
import logging
import posixpath
import re
from typing import Optional
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_HAS_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")
_HOST_RE = re.compile(r"^[\w.~%\-]+$")
_PARENT_SEGMENT_RE = re.compile(r"/[^/]+/\.\./")

# Leading characters of an XRI global context symbol.
XRI_GLOBAL_CONTEXT_CHARS = ("=", "@", "+", "$", "!", "(")


class UrlUtils:
    """A collection of static methods for URL validation and resolution."""

    @staticmethod
    def is_absolute(url) -> bool:
        """
        Checks if a value is a well-formed absolute URL (scheme and host present).
        Any non-string value is rejected.
        """
        if not isinstance(url, str) or not url:
            return False
        if any(ch.isspace() for ch in url):
            return False

        try:
            parsed_url = urlsplit(url)
            if not parsed_url.scheme or not _SCHEME_RE.match(parsed_url.scheme):
                return False
            if not parsed_url.netloc:
                return False

            host = parsed_url.hostname
            if not host or not (_HOST_RE.match(host) or ":" in host):
                return False

            # Raises ValueError for a non-numeric or out of range port.
            parsed_url.port
        except ValueError:
            logger.debug(f"Could not parse invalid URL: {url}")
            return False

        return True

    @staticmethod
    def make_absolute(url: str, base_url: Optional[str] = None, base_is_validated: bool = False) -> str:
        """
        Resolves a possibly relative URL against the URL of the page it was found on.

        ("/pics/img.jpg" found at http://example.com becomes "http://example.com/pics/img.jpg")

        Args:
            url (str): The ambiguous URL (e.g. http://example.com, /pics/img.jpg or img.jpg).
            base_url (str, optional): The URL of the page that referenced url.
            base_is_validated (bool): Skip re-validating base_url when the caller already did.

        Returns:
            str: The absolute URL. Never raises; without a usable base the URL is
            prefixed with "http://".
        """
        if UrlUtils.is_absolute(url):
            return url

        # Scheme-relative, e.g. //example.com/index.php
        if url.startswith("//") and UrlUtils.is_absolute("http:" + url):
            return "http:" + url

        if url.startswith("data:"):
            return url

        if not base_url or (not base_is_validated and not UrlUtils.is_absolute(base_url)):
            logger.debug(f"No usable base URL to resolve '{url}', assuming http.")
            return "http://" + url

        base = urlsplit(base_url)
        # Host including any port, without user credentials.
        host = base.netloc.rsplit("@", 1)[-1]

        if url.startswith("/"):
            resolved = host + url
        else:
            base_dir = host
            if base.path:
                last_chunk = base.path[base.path.rfind("/"):]
                if "." in last_chunk:
                    # The base points at a file; resolve against its directory.
                    base_dir += posixpath.dirname(base.path)
                else:
                    base_dir += base.path

            if not base_dir.endswith("/"):
                base_dir += "/"

            resolved = base_dir + url
            resolved = resolved.replace("/./", "/")

            previous = None
            while resolved != previous:
                previous = resolved
                resolved = _PARENT_SEGMENT_RE.sub("/", resolved)

        return f"{base.scheme}://{resolved}"

    @staticmethod
    def normalize(uri: str, xri: bool = False) -> Optional[str]:
        """
        Expands a partial URL (e.g. "example.com") into a full URL.

        Returns None for empty or unparseable input, and for XRIs unless xri is set.
        """
        if not uri or not isinstance(uri, str):
            return None

        uri = uri.strip()
        if uri.startswith("//"):
            uri = "http:" + uri

        if uri.lower().startswith("xri://"):
            uri = uri[6:]

        if not _HAS_SCHEME_RE.match(uri):
            if uri[:1] in XRI_GLOBAL_CONTEXT_CHARS:
                return uri if xri else None
            uri = "http://" + uri

        try:
            parsed_url = urlsplit(uri)
        except ValueError:
            logger.debug(f"Could not normalize invalid URL: {uri}")
            return None

        if not parsed_url.netloc:
            return None

        normalized = f"{parsed_url.scheme}://{parsed_url.netloc}{parsed_url.path or '/'}"
        if parsed_url.query:
            normalized += "?" + parsed_url.query
        return normalized

    @staticmethod
    def get_clean_url(url: str) -> str:
        """
        Strips the scheme and trailing slashes from a URL. For display purposes only!
        """
        url = re.sub(r"^.+?://", "", url, count=1)
        return url.rstrip("/")
