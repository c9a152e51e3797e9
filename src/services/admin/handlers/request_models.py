import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class CreatePackageRequest(BaseModel):
    """パッケージ作成リクエストモデル"""

    model_config = ConfigDict(str_strip_whitespace=True)

    slug: str = Field(..., min_length=1, max_length=80)
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=5000)
    price: int = Field(..., ge=0, strict=True, description="最小通貨単位の整数")
    active: bool = True
    segment_id: str | None = None


class UpdatePackageRequest(BaseModel):
    """パッケージ更新リクエストモデル（指定した項目のみ更新）"""

    model_config = ConfigDict(str_strip_whitespace=True)

    slug: str | None = Field(default=None, min_length=1, max_length=80)
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    price: int | None = Field(default=None, ge=0, strict=True)
    active: bool | None = None
    segment_id: str | None = None


class CreateAddOnRequest(BaseModel):
    """アドオン作成リクエストモデル（package_id なしは全パッケージ共通）"""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    price: int = Field(..., ge=0, strict=True)
    package_id: str | None = None
    active: bool = True


class UpdateAddOnRequest(BaseModel):
    """アドオン更新リクエストモデル"""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1, max_length=200)
    price: int | None = Field(default=None, ge=0, strict=True)
    active: bool | None = None


class CreateBlackoutRequest(BaseModel):
    """ブラックアウト追加リクエストモデル"""

    date: dt.date
    reason: str | None = Field(default=None, max_length=500)
