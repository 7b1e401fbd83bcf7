"""金额换算 -- Decimal 与整数分（cents）之间的精确转换

SQLite 没有定点小数类型，金额统一以整数分落盘，
对外暴露为保留两位小数的 Decimal，避免浮点误差。
"""

from decimal import Decimal, InvalidOperation

CENT = Decimal("0.01")


def to_cents(amount: Decimal) -> int:
    """将金额转换为整数分

    Raises:
        ValueError: 金额不是有限数，或小数位超过两位
    """
    try:
        quantized = amount.quantize(CENT)
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {amount}") from e
    if quantized != amount:
        raise ValueError(f"Amount must have at most 2 decimal places: {amount}")
    return int(quantized * 100)


def from_cents(cents: int) -> Decimal:
    """将整数分转换为两位小数的 Decimal"""
    return (Decimal(cents) / 100).quantize(CENT)
