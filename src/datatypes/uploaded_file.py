import mimetypes
from typing import Optional

from datatypes.base import Base
from datatypes.exceptions import DatatypeError
from datatypes.sanitizer import Sanitizer
from datatypes.validator import Validator


def _extension(filename: str) -> Optional[str]:
    # A leading dot (".htaccess") is not an extension separator.
    last_dot = filename.rfind(".")
    if last_dot <= 0:
        return None
    return filename[last_dot + 1:]


class UploadedFile(Base):
    """
    A file received through an upload form.

    Keeps both the name it was stored under and the name the client sent.
    """

    def __init__(self, stored_filename: str, orig_filename: str = ""):
        if not Validator.filename(stored_filename):
            raise DatatypeError("Invalid filename received.", code=400, value=stored_filename)
        if orig_filename and not Validator.stringlike(orig_filename):
            raise DatatypeError("Original filename must be a string or empty.", code=400, value=orig_filename)

        self.stored_filename = Sanitizer.filename(stored_filename)
        self.orig_filename = Sanitizer.filename(orig_filename) if orig_filename else ""
        super().__init__(self.stored_filename)

    def get_filename(self) -> str:
        return self.stored_filename

    def get_original_filename(self) -> str:
        return self.orig_filename

    def get_file_extension(self) -> Optional[str]:
        return _extension(self.stored_filename)

    def get_original_extension(self) -> Optional[str]:
        return _extension(self.orig_filename)

    def guess_mimetype(self) -> Optional[str]:
        """Guesses the MIME type from the extension, preferring the original name."""
        for name in (self.orig_filename, self.stored_filename):
            if name:
                guessed, _ = mimetypes.guess_type(name, strict=False)
                if guessed:
                    return guessed
        return None
