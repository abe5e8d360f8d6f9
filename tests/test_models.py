import pytest
from pydantic import ValidationError

from core.domain.models import Credentials, PageEnvelope, Session


def test_envelope_from_list():
    envelope = PageEnvelope.from_response([{"id": 1}])

    assert envelope.items == [{"id": 1}]
    assert envelope.page_count == 0
    assert envelope.item_count == 0


def test_envelope_prefers_total_items_over_total():
    envelope = PageEnvelope.from_response({"data": [], "totalPages": 2, "totalItems": 15, "total": 99})

    assert envelope.page_count == 2
    assert envelope.item_count == 15


def test_envelope_zero_total_items_falls_back_to_total():
    envelope = PageEnvelope.from_response({"data": [], "totalItems": 0, "total": 12})

    assert envelope.item_count == 12


def test_envelope_ignores_unknown_fields():
    envelope = PageEnvelope.from_response({"data": [1], "page": 4, "success": True})

    assert envelope.items == [1]


@pytest.mark.parametrize("body", [{"items": []}, "oops", None, {"data": "not-a-list"}, {"data": [], "totalPages": -1}])
def test_envelope_rejects_other_shapes(body):
    with pytest.raises(ValidationError):
        PageEnvelope.from_response(body)


def test_session_requires_token():
    with pytest.raises(ValidationError):
        Session(token="", user=None)


def test_session_is_immutable():
    session = Session(token="abc", user={"id": 1})

    with pytest.raises(ValidationError):
        session.token = "other"


def test_credentials_require_both_fields():
    with pytest.raises(ValidationError):
        Credentials(username="u", password="")
