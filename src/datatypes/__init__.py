# src/datatypes/__init__.py
from datatypes.exceptions import DatatypeError
from datatypes.html import Html
from datatypes.id import Id
from datatypes.sanitizer import Sanitizer
from datatypes.text import Text
from datatypes.time import Time
from datatypes.uploaded_file import UploadedFile
from datatypes.url import Url
from datatypes.validator import Validator

__version__ = "1.0.0"

__all__ = [
    "DatatypeError",
    "Html",
    "Id",
    "Sanitizer",
    "Text",
    "Time",
    "UploadedFile",
    "Url",
    "Validator",
]
