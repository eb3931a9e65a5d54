from typing import Any


class Base:
    """
    Common base of the value classes.

    A datatype wraps one validated value; val() returns it and str() renders it.
    """

    def __init__(self, value: Any = None):
        self._val = value

    def val(self) -> Any:
        return self._val

    def __str__(self) -> str:
        return str(self.val())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.val()!r})"

    def __eq__(self, other) -> bool:
        if isinstance(other, Base):
            return type(self) is type(other) and self.val() == other.val()
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self).__name__, str(self.val())))
