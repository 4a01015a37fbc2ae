from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from conftest import VALID_PAYLOAD
from portfolio_api.schemas.contacts import (
    ContactCreate,
    ContactSubmission,
    contact_schema_document,
    describe_errors,
)


def _errors_for(payload: dict) -> list:
    with pytest.raises(ValidationError) as exc_info:
        ContactCreate.model_validate(payload)
    return describe_errors(exc_info.value.errors())


def test_valid_payload():
    contact = ContactCreate.model_validate(VALID_PAYLOAD)
    assert contact.name == "Jane Doe"
    assert str(contact.email) == "jane@example.com"


def test_boundaries_are_inclusive():
    payload = dict(
        name="Jo",
        email="jo@example.com",
        subject="s" * 5,
        message="m" * 10,
    )
    ContactCreate.model_validate(payload)
    ContactCreate.model_validate(dict(payload, name="J" * 50, subject="s" * 100, message="m" * 1000))


def test_extra_keys_are_dropped():
    contact = ContactCreate.model_validate(dict(VALID_PAYLOAD, id="abc", createdAt="2020-01-01"))
    assert set(contact.model_dump()) == {"name", "email", "subject", "message"}


def test_messages_for_invalid_form():
    errors = _errors_for({"name": "J", "email": "not-an-email", "subject": "", "message": "short"})
    by_field = {e["field"]: e["message"] for e in errors}

    assert by_field == {
        "name": "Name must be at least 2 characters",
        "email": "Please enter a valid email address",
        "subject": "Subject must be at least 5 characters",
        "message": "Message must be at least 10 characters",
    }


def test_empty_email_is_required():
    errors = _errors_for(dict(VALID_PAYLOAD, email=""))
    assert errors == [{"field": "email", "message": "Email is required", "type": "string_too_short"}]


def test_unmapped_error_falls_back_to_pydantic_message():
    errors = _errors_for(dict(VALID_PAYLOAD, message=42))
    assert errors[0]["field"] == "message"
    assert errors[0]["type"] == "string_type"
    assert errors[0]["message"]


def test_describe_errors_strips_body_location():
    described = describe_errors([
        {"loc": ("body", "name"), "type": "string_too_short", "msg": "too short"},
        {"loc": ("body",), "type": "json_invalid", "msg": "JSON decode error"},
    ])
    assert described == [
        {"field": "name", "message": "Name must be at least 2 characters", "type": "string_too_short"},
        {"field": "body", "message": "JSON decode error", "type": "json_invalid"},
    ]


def test_submission_serialises_created_at_in_camel_case():
    record = ContactSubmission(
        id="1",
        created_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
        **VALID_PAYLOAD,
    )
    dumped = record.model_dump(mode="json", by_alias=True)
    assert "createdAt" in dumped
    assert "created_at" not in dumped


def test_schema_document_matches_model():
    document = contact_schema_document()
    properties = document["jsonSchema"]["properties"]

    assert properties["name"]["minLength"] == document["rules"]["name"]["minLength"]
    assert properties["subject"]["maxLength"] == document["rules"]["subject"]["maxLength"]
    assert properties["name"]["pattern"] == document["rules"]["name"]["pattern"]


@pytest.mark.parametrize("value", ["Jane <jane@example.com>", "<jane@example.com>"])
def test_display_name_email_is_rejected(value):
    errors = _errors_for(dict(VALID_PAYLOAD, email=value))
    assert errors == [{"field": "email", "message": "Please enter a valid email address", "type": "value_error"}]
