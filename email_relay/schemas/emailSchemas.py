from typing import Any, Dict, Optional

import pydantic
from pydantic import BaseModel, ConfigDict, Field, model_validator

from email_relay.core.exceptions import ValidationError
from email_relay.constants.constants import CONTACT_FIELDS_REQUIRED, REPLY_FIELDS_REQUIRED


def _validate_required(model: type, payload: Any, error_message: str):
    """
    Build a request model, treating any missing or falsy field as a client error.

    Args:
        model: The request schema to build.
        payload: Decoded JSON body (anything other than an object counts as empty).
        error_message: Message carried by the ValidationError.
    """
    if not isinstance(payload, dict):
        payload = {}

    for field in model.model_fields.values():
        if not payload.get(field.alias):
            raise ValidationError(error_message)

    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise ValidationError(error_message) from exc


class ContactNotificationRequest(BaseModel):
    """Contact form submission. Wire keys are the Portuguese field names used by the site."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    name: str = Field(alias="nome")
    email: str = Field(alias="email")
    phone: str = Field(alias="telefone")
    route_key: str = Field(alias="roteiro")
    message: str = Field(alias="mensagem")

    @classmethod
    def from_payload(cls, payload: Any) -> "ContactNotificationRequest":
        return _validate_required(cls, payload, CONTACT_FIELDS_REQUIRED)


class ReplyRequest(BaseModel):
    """Free-form reply written by an administrator."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    to: str = Field(alias="to")
    subject: str = Field(alias="subject")
    message: str = Field(alias="message")

    @classmethod
    def from_payload(cls, payload: Any) -> "ReplyRequest":
        return _validate_required(cls, payload, REPLY_FIELDS_REQUIRED)


class SendResult(BaseModel):
    """Response envelope returned by both send operations."""

    success: bool
    message: Optional[str] = None
    id: Optional[str] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def check_consistency(self) -> "SendResult":
        if self.success and (self.error is not None or self.id is None):
            raise ValueError("successful results carry an id and no error")
        if not self.success and (self.error is None or self.id is not None or self.message is not None):
            raise ValueError("failed results carry only an error")
        return self

    @classmethod
    def sent(cls, email_id: str, message: str) -> "SendResult":
        return cls(success=True, id=email_id, message=message)

    @classmethod
    def failed(cls, error: str) -> "SendResult":
        return cls(success=False, error=error)

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ContactNotificationView(BaseModel):
    """Values rendered into the contact notification template."""

    name: str
    email: str
    phone: str
    route_label: str
    message: str
    sent_at: str


class ReplyView(BaseModel):
    """Values rendered into the reply template."""

    message: str
