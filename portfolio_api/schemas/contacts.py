# portfolio_api/schemas/contacts.py
from datetime import datetime
from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

# Single source of the contact form constraints, also served to the front end
VALIDATION_RULES = {
    "name": {"minLength": 2, "maxLength": 50, "pattern": r"^[a-zA-Z\s]+$"},
    "email": {"minLength": 1, "maxLength": 100},
    "subject": {"minLength": 5, "maxLength": 100},
    "message": {"minLength": 10, "maxLength": 1000},
}

# Messages shown next to the form fields, keyed by (field, pydantic error type)
FIELD_ERROR_MESSAGES = {
    ("name", "missing"): "Name is required",
    ("name", "string_too_short"): "Name must be at least 2 characters",
    ("name", "string_too_long"): "Name must be less than 50 characters",
    ("name", "string_pattern_mismatch"): "Name can only contain letters and spaces",
    ("email", "missing"): "Email is required",
    ("email", "string_too_short"): "Email is required",
    ("email", "string_too_long"): "Email must be less than 100 characters",
    ("email", "value_error"): "Please enter a valid email address",
    ("subject", "missing"): "Subject is required",
    ("subject", "string_too_short"): "Subject must be at least 5 characters",
    ("subject", "string_too_long"): "Subject must be less than 100 characters",
    ("message", "missing"): "Message is required",
    ("message", "string_too_short"): "Message must be at least 10 characters",
    ("message", "string_too_long"): "Message must be less than 1000 characters",
}


class ContactCreate(BaseModel):
    name: str = Field(
        ...,
        min_length=VALIDATION_RULES["name"]["minLength"],
        max_length=VALIDATION_RULES["name"]["maxLength"],
        pattern=VALIDATION_RULES["name"]["pattern"],
        examples=["Jane Doe"],
    )
    email: EmailStr = Field(..., examples=["jane@example.com"])
    subject: str = Field(
        ...,
        min_length=VALIDATION_RULES["subject"]["minLength"],
        max_length=VALIDATION_RULES["subject"]["maxLength"],
        examples=["Project inquiry"],
    )
    message: str = Field(
        ...,
        min_length=VALIDATION_RULES["message"]["minLength"],
        max_length=VALIDATION_RULES["message"]["maxLength"],
        examples=["I would like to discuss a project opportunity."],
    )

    model_config = ConfigDict(extra="ignore")

    @field_validator("email", mode="before")
    @classmethod
    def email_length(cls, v: Any) -> Any:
        # EmailStr carries no length constraint of its own
        if isinstance(v, str):
            if not v:
                raise PydanticCustomError("string_too_short", "Email is required")
            if len(v) > VALIDATION_RULES["email"]["maxLength"]:
                raise PydanticCustomError(
                    "string_too_long",
                    "Email must be less than {max_length} characters",
                    {"max_length": VALIDATION_RULES["email"]["maxLength"]},
                )
            # EmailStr would reduce "Jane <jane@example.com>" to the bare address
            if "<" in v or ">" in v:
                raise PydanticCustomError("value_error", "value is not a valid email address")
        return v


class ContactSubmission(BaseModel):
    id: str
    name: str
    email: str
    subject: str
    message: str
    created_at: datetime = Field(..., serialization_alias="createdAt")

    model_config = ConfigDict(from_attributes=True)


class FieldError(BaseModel):
    field: str
    message: str
    type: str


class ContactCreateResponse(BaseModel):
    success: bool = True
    message: str
    data: Optional[ContactSubmission] = None
    warning: Optional[str] = None


class ContactListResponse(BaseModel):
    success: bool = True
    data: List[ContactSubmission]


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    errors: Optional[List[FieldError]] = None


def describe_errors(errors: Iterable[dict]) -> List[dict]:
    """
    Turn pydantic / FastAPI validation errors into {field, message, type}
    entries. The leading "body" location segment is dropped.
    """
    described = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(loc) if loc else "body"
        error_type = error.get("type", "value_error")
        message = FIELD_ERROR_MESSAGES.get((field, error_type), error.get("msg", "Invalid value"))
        described.append({"field": field, "message": message, "type": error_type})
    return described


def contact_schema_document() -> dict:
    return {
        "rules": VALIDATION_RULES,
        "jsonSchema": ContactCreate.model_json_schema(),
    }
