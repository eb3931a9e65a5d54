import logging
from typing import Iterable, Optional, Union

import chardet

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_ENCODING = "latin-1"


def _attempt_encodings(raw: bytes, encodings: Iterable[Optional[str]]) -> Optional[str]:
    for enc in encodings:
        if not enc:
            continue
        try:
            return raw.decode(enc)
        except (UnicodeDecodeError, LookupError):
            logger.debug("Could not decode input as %s.", enc)
    return None


def to_unicode(value: Union[str, bytes, None], fallback: str = DEFAULT_FALLBACK_ENCODING) -> str:
    """
    Returns value as text, detecting the encoding of byte strings.

    Tries UTF-8 first, then chardet's guess for the first 1024 bytes and for the
    whole input, and finally the fallback encoding. A Latin-1 compatible fallback
    decodes any byte sequence, so this never raises for bytes input.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if not isinstance(value, (bytes, bytearray)):
        return str(value)

    raw = bytes(value)

    def encodings():
        yield "utf-8"
        yield chardet.detect(raw[:1024])["encoding"]
        yield chardet.detect(raw)["encoding"]

    decoded = _attempt_encodings(raw, encodings())
    if decoded is not None:
        return decoded

    logger.debug("Encoding detection failed, falling back to %s.", fallback)
    try:
        return raw.decode(fallback)
    except (UnicodeDecodeError, LookupError):
        return raw.decode(DEFAULT_FALLBACK_ENCODING)
