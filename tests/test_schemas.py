from schemas.courses import BatchUpdate
from schemas.common import changes


def test_changes_only_includes_sent_fields():
    payload = BatchUpdate.model_validate({"name": "Evening"})
    assert changes(payload) == {"name": "Evening"}


def test_changes_keeps_null_only_for_clearable_fields():
    payload = BatchUpdate.model_validate({"name": None, "endDate": None, "isActive": False})
    assert changes(payload) == {"is_active": False}
    assert changes(payload, ("end_date",)) == {"end_date": None, "is_active": False}
