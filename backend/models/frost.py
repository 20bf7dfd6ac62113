"""Pydantic schemas for the winter length estimate."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from cabin_savings.winter import FrostEstimate


class Period(BaseModel):
    """Winter season window, serialized as ``{"from": ..., "to": ...}``."""
    model_config = ConfigDict(populate_by_name=True)

    start: date = Field(alias="from")
    end: date = Field(alias="to")


class FrostResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    suggested_winter_months: int = Field(alias="suggestedWinterMonths", ge=1, le=7)
    frost_days_count: int | None = Field(default=None, alias="frostDaysCount")
    period: Period
    note: str

    @classmethod
    def from_estimate(cls, estimate: FrostEstimate) -> "FrostResult":
        return cls(
            suggested_winter_months=estimate.suggested_winter_months,
            frost_days_count=estimate.frost_days_count,
            period=Period(start=estimate.period.start, end=estimate.period.end),
            note=estimate.note,
        )


class ErrorBody(BaseModel):
    error: str
