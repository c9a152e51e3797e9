import datetime as dt

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class CreateCheckoutRequest(BaseModel):
    """チェックアウト作成リクエストモデル

    クライアントが送る合計金額などの余分な項目は無視する。
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    package_id: str = Field(..., min_length=1)
    event_date: dt.date
    add_on_ids: list[str] = Field(default_factory=list, max_length=20)
    customer_name: str = Field(..., min_length=1, max_length=200)
    customer_email: EmailStr
