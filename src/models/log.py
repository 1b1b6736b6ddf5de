"""Life-log domain models: logs, attachments, and extracted events.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Models (bottom of the dependency graph: no imports from upper
# layers).
#
# A ``Log`` is one ingested message.  It carries either text or a
# reference to an ``Attachment`` (a photo), never both and never neither.
# ``Event``s are structured facts derived from a text log by the
# extraction pipeline; each belongs to exactly one log.
#
# Extractors do not know the log id yet, so they emit ``EventOutput``s
# which the orchestrator turns into ``Event`` rows once the log exists.
#
# All models are frozen: logs, attachments and events are never updated
# after creation.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
import copy
from typing import Any
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidatorFunctionWrapHandler,
    model_validator,
)


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EventType(str, Enum):
    """Kinds of events the extractors can produce."""

    GOOD_MORNING = "GOOD_MORNING"  # wake marker
    GOOD_NIGHT = "GOOD_NIGHT"  # sleep marker
    ATE_OR_DRANK = "ATE_OR_DRANK"  # food intake


class FoodPhoto(BaseModel):
    """Image references attached to a nutrition record."""

    model_config = ConfigDict(frozen=True, extra="allow")

    thumb: str | None = None
    highres: str | None = None


class FoodItem(BaseModel):
    """One food record returned by the nutrition lookup service.

    Field names follow the Nutritionix ``natural/nutrients`` response so
    the record can be stored as event metadata without translation.
    Fields the service adds beyond these are kept (``extra="allow"``).
    Quantities accept ints or floats so neither is coerced into the other.

    The mapping the record was validated from is kept as :attr:`record`,
    which is what gets stored as event metadata.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    _record: dict[str, Any] | None = PrivateAttr(default=None)

    food_name: str
    serving_qty: int | float | None = None
    serving_unit: str | None = None
    serving_weight_grams: int | float | None = None
    nf_calories: int | float | None = None
    nf_total_fat: int | float | None = None
    nf_saturated_fat: int | float | None = None
    nf_cholesterol: int | float | None = None
    nf_sodium: int | float | None = None
    nf_total_carbohydrate: int | float | None = None
    nf_dietary_fiber: int | float | None = None
    nf_sugars: int | float | None = None
    nf_protein: int | float | None = None
    nf_potassium: int | float | None = None
    photo: FoodPhoto | None = None

    @model_validator(mode="wrap")
    @classmethod
    def _keep_record(cls, data: Any, handler: ValidatorFunctionWrapHandler) -> FoodItem:
        item = handler(data)
        if isinstance(data, dict):
            item._record = copy.deepcopy(data)
        return item

    @property
    def record(self) -> dict[str, Any]:
        """The upstream record, keys and number types exactly as received."""
        if self._record is None:
            return self.model_dump(mode="json", exclude_unset=True)
        return copy.deepcopy(self._record)


class Attachment(BaseModel):
    """Binary content (a photo) owned independently of its log."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    created_at: datetime = Field(default_factory=utc_now)
    contents: bytes = Field(repr=False)


class Log(BaseModel):
    """A single ingested message: text or an attachment reference."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    created_at: datetime = Field(default_factory=utc_now)
    message: str | None = None
    attachment_id: str | None = None

    @model_validator(mode="after")
    def _exactly_one_payload(self) -> Log:
        has_text = bool(self.message)
        has_attachment = self.attachment_id is not None
        if has_text == has_attachment:
            raise ValueError("A log carries either message text or an attachment, exactly one")
        return self

    @property
    def kind(self) -> str:
        """``"image"`` for attachment logs, ``"text"`` otherwise."""
        return "image" if self.attachment_id is not None else "text"


class EventOutput(BaseModel):
    """Extractor result not yet tied to a log."""

    model_config = ConfigDict(frozen=True)

    type: EventType
    meta: dict[str, Any] | None = None

    def to_event(self, log_id: str) -> Event:
        return Event(log_id=log_id, type=self.type, meta=self.meta)


class Event(BaseModel):
    """A structured fact extracted from a log's text."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    log_id: str
    type: EventType
    meta: dict[str, Any] | None = None


class LogEntry(BaseModel):
    """Read model: a log together with its events."""

    model_config = ConfigDict(frozen=True)

    log: Log
    events: list[Event] = Field(default_factory=list)
