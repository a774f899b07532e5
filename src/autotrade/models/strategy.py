"""Strategy, selection factor and candidate models (engine inputs)."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

FactorCategory = Literal["technical", "fundamental", "sentiment", "custom"]


class _FactorBase(BaseModel):
    id: str
    name: str
    category: FactorCategory
    description: str | None = None


class CheckboxFactor(_FactorBase):
    """On/off factor, e.g. "MACD golden cross"."""

    type: Literal["checkbox"] = "checkbox"
    value: bool = False

    @property
    def enabled(self) -> bool:
        return self.value


class RangeFactor(_FactorBase):
    """Numeric band, e.g. PE between 10 and 30."""

    type: Literal["range"] = "range"
    value: tuple[float, float] | None = None
    min: float | None = None
    max: float | None = None
    unit: str | None = None

    @property
    def enabled(self) -> bool:
        return self.value is not None


class FactorOption(BaseModel):
    label: str
    value: str


class SelectFactor(_FactorBase):
    type: Literal["select"] = "select"
    value: str | None = None
    options: list[FactorOption] = Field(default_factory=list)

    @property
    def enabled(self) -> bool:
        return bool(self.value)


class TextFactor(_FactorBase):
    type: Literal["text"] = "text"
    value: str | None = None

    @property
    def enabled(self) -> bool:
        return bool(self.value and self.value.strip())


SelectionFactor = Annotated[
    Union[CheckboxFactor, RangeFactor, SelectFactor, TextFactor],
    Field(discriminator="type"),
]


class Strategy(BaseModel):
    """A user-defined stock selection strategy. Never mutated by the engine."""

    id: str
    name: str
    description: str | None = None
    factors: list[SelectionFactor] = Field(default_factory=list)
    status: Literal["active", "inactive", "testing"] = "active"
    tags: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class Candidate(BaseModel):
    """A quoted instrument offered to the signal generator."""

    code: str
    name: str
    price: Decimal
