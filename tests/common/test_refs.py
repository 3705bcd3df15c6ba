import pytest

from kindergarten_staff.common.refs import Embedded, Ref, resolve_id, to_ref
from kindergarten_staff.core.exceptions import ValidationError


def test_bare_and_embedded_ids_resolve_to_same_string():
    assert resolve_id(42) == "42"
    assert resolve_id(" 42 ") == "42"
    assert resolve_id({"_id": "42", "fullName": "Aigerim"}) == "42"
    assert resolve_id({"id": 42}) == "42"


def test_embedded_fields_do_not_affect_equality():
    a = to_ref({"_id": "7", "fullName": "A"})
    b = to_ref({"_id": "7", "fullName": "B"})
    assert isinstance(a, Embedded)
    assert a == b


def test_ref_is_kept():
    assert to_ref(Ref("5")) == Ref("5")


@pytest.mark.parametrize("bad", [None, "", "   ", True, {"fullName": "x"}])
def test_invalid_identifiers(bad):
    with pytest.raises(ValidationError):
        resolve_id(bad)
