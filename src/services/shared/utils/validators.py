from decimal import Decimal


def to_int(v: object) -> int:
    """DynamoDB の Number（Decimal）などを int に変換する

    金額やバージョンは整数でしか保存しないため、小数部があれば拒否する。
    """
    if isinstance(v, bool):
        raise ValueError(f"Not an integer: {v!r}")
    if isinstance(v, int):
        return v
    d = v if isinstance(v, Decimal) else Decimal(str(v))
    if d != d.to_integral_value():
        raise ValueError(f"Not an integer: {v!r}")
    return int(d)
