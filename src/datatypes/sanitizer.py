import re

from datatypes.validator import Validator


class Sanitizer:
    """Strips unwanted characters from strings. Non-string input becomes ""."""

    @staticmethod
    def alphanum(value) -> str:
        if not Validator.stringlike(value):
            return ""
        return re.sub(r"[^a-z0-9]+", "", str(value), flags=re.IGNORECASE)

    @staticmethod
    def versionstring(value) -> str:
        if not Validator.stringlike(value):
            return ""
        return re.sub(r"[^A-Za-z0-9\-_.]", "", str(value))

    @staticmethod
    def filename(value) -> str:
        """Reduces a file name to word characters, dots, dashes and spaces, with no path parts."""
        if not Validator.stringlike(value):
            return ""
        name = str(value).replace("\\", "/").split("/")[-1]
        name = re.sub(r"[^\w.\- ]+", "", name)
        name = re.sub(r"\.{2,}", ".", name)
        return name.strip(" .")
