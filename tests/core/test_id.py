# tests/core/test_id.py
import pytest

from datatypes.exceptions import DatatypeError
from datatypes.id import Id

VALID_IDS = [1, 1000, "10"]
INVALID_IDS = [0, "0", True, False, None, [], object(), 1.2, "1.0", "test", -1, "-1", "010"]


@pytest.mark.parametrize("value", VALID_IDS)
def test_validate_accepts_positive_integers(value):
    assert Id.validate(value) is True


@pytest.mark.parametrize("value", INVALID_IDS)
def test_validate_rejects_everything_else(value):
    assert Id.validate(value) is False


@pytest.mark.parametrize("value", VALID_IDS)
def test_construct(value):
    record_id = Id(value)
    assert record_id.val() == int(value)
    assert str(record_id) == str(value)


@pytest.mark.parametrize("value", INVALID_IDS)
def test_construct_rejects_invalid_ids(value):
    with pytest.raises(DatatypeError) as exc_info:
        Id(value)
    assert exc_info.value.code == 406


def test_ids_compare_by_value():
    assert Id(5) == Id("5")
    assert Id(5) != Id(6)
    assert len({Id(5), Id("5")}) == 1
