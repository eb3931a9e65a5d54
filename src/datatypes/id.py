from datatypes.base import Base
from datatypes.exceptions import DatatypeError
from datatypes.validator import Validator


class Id(Base):
    """A positive integer record ID."""

    def __init__(self, value):
        if not Id.validate(value):
            raise DatatypeError("Bad ID received.", code=406, value=value)
        super().__init__(int(value))

    @staticmethod
    def validate(value) -> bool:
        return Validator.intlike(value) and int(value) >= 1
