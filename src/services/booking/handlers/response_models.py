from pydantic import BaseModel

from services.booking.applications import CheckoutResult
from services.booking.domain.entity import Booking


class CheckoutData(BaseModel):
    """チェックアウト作成のレスポンスモデル"""

    booking_id: str
    checkout_url: str


class BookingData(BaseModel):
    """予約のレスポンスモデル（管理画面向け）"""

    booking_id: str
    package_id: str
    package_title: str
    event_date: str
    customer_name: str
    email: str
    add_on_ids: list[str]
    add_on_titles: list[str]
    total: int
    currency: str
    status: str
    cancellation_reason: str | None = None
    checkout_session_id: str | None = None
    created_at: str
    updated_at: str


class SuccessResponse(BaseModel):
    """成功レスポンスモデル"""

    status: str = "success"
    data: CheckoutData


def checkout_response(result: CheckoutResult) -> dict:
    return SuccessResponse(
        data=CheckoutData(
            booking_id=str(result.booking_id), checkout_url=result.checkout_url
        )
    ).model_dump()


def booking_data(booking: Booking) -> dict:
    """Booking エンティティをレスポンス辞書に変換する"""
    return BookingData(
        booking_id=str(booking.id),
        package_id=str(booking.package_id),
        package_title=booking.package_title,
        event_date=str(booking.event_date),
        customer_name=booking.customer.name,
        email=booking.customer.email,
        add_on_ids=[str(a) for a in booking.add_on_ids],
        add_on_titles=list(booking.add_on_titles),
        total=booking.total.amount,
        currency=str(booking.total.currency),
        status=booking.status.value,
        cancellation_reason=(
            booking.cancellation_reason.value if booking.cancellation_reason else None
        ),
        checkout_session_id=booking.checkout_session_id,
        created_at=booking.created_at.isoformat(),
        updated_at=booking.updated_at.isoformat(),
    ).model_dump()
