import datetime as dt

from pydantic import BaseModel

from services.availability.domain.value_object import (
    AvailabilityVerdict,
    UnavailableDates,
)


class AvailabilityData(BaseModel):
    """空き状況のレスポンスモデル"""

    date: dt.date
    available: bool
    reasons: list[str]
    degraded: bool


class UnavailableDatesData(BaseModel):
    """予約不可日のレスポンスモデル"""

    dates: list[dt.date]
    degraded: bool


def availability_data(verdict: AvailabilityVerdict) -> dict:
    return AvailabilityData(
        date=verdict.date,
        available=verdict.available,
        reasons=sorted(reason.value for reason in verdict.reasons),
        degraded=verdict.degraded,
    ).model_dump(mode="json")


def unavailable_dates_data(result: UnavailableDates) -> dict:
    return UnavailableDatesData(
        dates=sorted(result.dates), degraded=result.degraded
    ).model_dump(mode="json")
