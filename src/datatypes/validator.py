from __future__ import annotations

import re
from numbers import Number

MIME_TOP_LEVEL_TYPES = ("application", "audio", "image", "message", "multipart", "text", "video")
IMAGE_MIME_SUBTYPES = ("gif", "jpeg", "pjpeg", "png", "svg+xml", "tiff", "vnd.microsoft.icon")

_NUMERIC_RE = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
_ALPHA_RE = re.compile(r"^[A-Za-z]+$")

_ATOM = r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+"
_EMAIL_RE = re.compile(
    rf"^(?:{_ATOM}(?:\.{_ATOM})*|\"(?:[^\"\\\r\n]|\\.)*\")"
    r"@(?:(?:[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?\.)+[A-Za-z]{2,63}"
    r"|\[(?:(?:\d{1,3}\.){3}\d{1,3}|IPv6:[0-9A-Fa-f:.]+)\])$"
)


class Validator:
    """
    Type and format predicates.

    Every check accepts any value and returns a bool; none of them raise.
    """

    @staticmethod
    def intlike(value) -> bool:
        """True for ints and canonical integer strings ("10", "-1"), never for bools or floats."""
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return True
        if isinstance(value, str):
            try:
                return str(int(value)) == value
            except ValueError:
                return False
        return False

    @staticmethod
    def pos_int(value) -> bool:
        return Validator.intlike(value) and int(value) >= 0

    @staticmethod
    def timestamp(value) -> bool:
        return Validator.intlike(value) and int(value) > 0

    @staticmethod
    def empty_str(value) -> bool:
        """True for strings that are blank once &nbsp; is treated as a space."""
        if not isinstance(value, str):
            return False
        return value.replace("&nbsp;", " ").strip() == ""

    @staticmethod
    def alpha(value) -> bool:
        return isinstance(value, str) and bool(_ALPHA_RE.match(value))

    @staticmethod
    def filename(value) -> bool:
        # Any name goes, as long as it cannot traverse directories.
        return isinstance(value, str) and ".." not in value and "/" not in value

    @staticmethod
    def email(value) -> bool:
        """Syntax check only; the domain is not looked up."""
        return isinstance(value, str) and bool(_EMAIL_RE.match(value))

    @staticmethod
    def float(value) -> bool:
        if isinstance(value, bool):
            return False
        if isinstance(value, Number):
            return True
        return isinstance(value, str) and bool(_NUMERIC_RE.match(value))

    @staticmethod
    def boollike(value) -> bool:
        if isinstance(value, bool):
            return True
        if type(value) is int:
            return value in (0, 1)
        return value in ("0", "1") if isinstance(value, str) else False

    @staticmethod
    def bool(value) -> bool:
        return Validator.boollike(value)

    @staticmethod
    def boolint(value) -> bool:
        return type(value) is int and value in (0, 1)

    @staticmethod
    def stringlike(value) -> bool:
        return isinstance(value, str) or Validator.float(value)

    @staticmethod
    def mime(value, against: str = "") -> bool:
        """
        Checks a type/subtype MIME string.

        With against="image" the value must also be a known image type. Other
        values of against are not supported and fail the check.
        """
        if not isinstance(value, str) or "/" not in value:
            return False
        parts = value.split("/")
        if len(parts) != 2:
            return False
        mime_type, subtype = parts
        if mime_type not in MIME_TOP_LEVEL_TYPES:
            return False
        if not against:
            return True
        if against == "image":
            return mime_type == "image" and subtype in IMAGE_MIME_SUBTYPES
        return False

    @staticmethod
    def date(date_format: str, value) -> bool:
        """Validates a date in the given format. Only "YYYYMMDD" is supported."""
        if date_format != "YYYYMMDD":
            return False
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            return False

        text = str(value)
        if len(text) != 8:
            return False
        if isinstance(value, str) and not Validator.intlike(value):
            return False
        if not text.isdigit():
            return False

        month, day = int(text[4:6]), int(text[6:8])
        return 1 <= month <= 12 and 1 <= day <= 31
