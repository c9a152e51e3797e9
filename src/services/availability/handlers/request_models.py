import datetime as dt

from pydantic import BaseModel


class AvailabilityQuery(BaseModel):
    """空き状況照会のクエリパラメータ"""

    date: dt.date


class UnavailableDatesQuery(BaseModel):
    """予約不可日照会のクエリパラメータ"""

    start: dt.date
    end: dt.date
