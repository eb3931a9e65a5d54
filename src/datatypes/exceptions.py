# src/datatypes/exceptions.py
from typing import Optional


class DatatypeError(ValueError):
    """
    Raised when a value cannot be wrapped by a datatype.

    Carries an HTTP-style status code so request-handling code can map the
    failure straight onto a response (400 for bad input, 406 for a bad ID).
    """

    def __init__(self, message: str, code: int = 400, value: Optional[object] = None):
        super().__init__(message)
        self.code = code
        self.value = value

    def __repr__(self) -> str:
        return f"<DatatypeError code={self.code} message={str(self)!r}>"
