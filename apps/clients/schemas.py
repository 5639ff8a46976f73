"""Schemas Pydantic para los clientes del CRM.

Los nombres de campo en el cable siguen el formato del front-end
(``firstName``, ``eventDate``...). En Python se usan nombres snake_case
con alias.
"""

import re
from datetime import date, datetime
from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator

from .errors import DraftInvalid

EventType = Literal["wedding", "funeral", "corporate", "birthday", "anniversary", "other"]
Status = Literal["prospect", "quoted", "booked", "completed", "cancelled"]

EVENT_TYPES = ("wedding", "funeral", "corporate", "birthday", "anniversary", "other")
STATUSES = ("prospect", "quoted", "booked", "completed", "cancelled")
DEFAULT_STATUS = "prospect"

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DATE_FIELDS = ("event_date", "contact_date")
OPTIONAL_FIELDS = (
    "email", "phone", "company", "event_type",
    "event_date", "contact_date", "budget", "notes",
)


def parse_iso_date(value: Any) -> Optional[date]:
    """Convierte un valor tipo fecha en ``date``. ``None`` o "" significan sin fecha."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if not ISO_DATE_RE.match(text):
            raise ValueError("Date must use the YYYY-MM-DD format")
        return date.fromisoformat(text)
    raise ValueError(f"Unsupported date value: {value!r}")


def format_iso_date(value: Optional[date]) -> Optional[str]:
    """Serializa una fecha a ``YYYY-MM-DD``; la ausencia se mantiene como ``None``."""
    if value is None:
        return None
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


class ClientDraft(BaseModel):
    """Valores editables de un cliente, antes de que el store asigne la identidad."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    first_name: str = Field(alias="firstName", min_length=1, max_length=100)
    last_name: str = Field(alias="lastName", min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=40)
    company: Optional[str] = Field(default=None, max_length=200)
    event_type: Optional[EventType] = Field(default=None, alias="eventType")
    event_date: Optional[date] = Field(default=None, alias="eventDate")
    contact_date: Optional[date] = Field(default=None, alias="contactDate")
    status: Status
    budget: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    notes: Optional[str] = None

    @field_validator(*OPTIONAL_FIELDS, mode="before")
    @classmethod
    def _blank_is_absent(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator(*DATE_FIELDS, mode="before")
    @classmethod
    def _iso_date(cls, value):
        return parse_iso_date(value)

    @classmethod
    def from_form(cls, values: Mapping[str, Any]) -> "ClientDraft":
        """Valida valores crudos de formulario; lanza ``DraftInvalid`` con errores por campo."""
        try:
            return cls.model_validate(dict(values))
        except ValidationError as e:
            field_errors = {}
            for err in e.errors():
                field = str(err["loc"][0]) if err["loc"] else "__all__"
                field_errors.setdefault(field, _error_message(field, err))
            raise DraftInvalid(field_errors) from e

    def to_payload(self) -> dict:
        """Cuerpo JSON para el store: alias del cable, fechas ISO, ausentes como ``None``."""
        data = self.model_dump(by_alias=True)
        data["eventDate"] = format_iso_date(self.event_date)
        data["contactDate"] = format_iso_date(self.contact_date)
        return data


REQUIRED_MESSAGES = {
    "firstName": "Please enter first name",
    "lastName": "Please enter last name",
    "status": "Please select status",
}


def _error_message(field: str, err: dict) -> str:
    if field in REQUIRED_MESSAGES and (
        err["type"] in ("missing", "string_too_short") or err.get("input") in (None, "")
    ):
        return REQUIRED_MESSAGES[field]
    if err["type"] == "value_error":
        return str(err.get("ctx", {}).get("error", err["msg"]))
    return err["msg"]


class ClientRecord(ClientDraft):
    """Cliente tal como lo devuelve el store, con identidad y campos derivados."""

    id: str = Field(alias="_id")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_draft(self) -> ClientDraft:
        return ClientDraft.model_validate(self.model_dump(exclude={"id", "created_at", "updated_at"}))

    def to_form_values(self) -> dict:
        """Valores iniciales del formulario de edición, con fechas como ``date``."""
        values = self.model_dump(by_alias=True, exclude={"id", "created_at", "updated_at"})
        values["eventDate"] = self.event_date
        values["contactDate"] = self.contact_date
        return values

