# app/models/enums.py
from __future__ import annotations

from enum import StrEnum


class OrderType(StrEnum):
    """
    单据类型（封闭集合，无默认值；建单时必须显式给出）：

    - StockIn / StockOut            入库 / 出库
    - Return / Exchange             退货 / 换货
    - Calibration(Strict)           校准（严格校准）
    - Verification(Strict)          核验（严格核验）
    """

    StockIn = "StockIn"
    StockOut = "StockOut"
    Return = "Return"
    Exchange = "Exchange"
    Calibration = "Calibration"
    CalibrationStrict = "CalibrationStrict"
    Verification = "Verification"
    VerificationStrict = "VerificationStrict"


class OrderCurrency(StrEnum):
    """结算币种；未知币种统一落 Unknown（默认值）。"""

    CNY = "CNY"
    HKD = "HKD"
    USD = "USD"
    GBP = "GBP"
    MYR = "MYR"
    IDR = "IDR"
    INR = "INR"
    PHP = "PHP"
    Unknown = "Unknown"

    @classmethod
    def default(cls) -> "OrderCurrency":
        return cls.Unknown


class OrderPaymentStatus(StrEnum):
    """
    付款状态：
    - Settled         已结清
    - Unsettled       未结（默认值）
    - PartialSettled  部分结清
    - None            不涉及付款
    """

    Settled = "Settled"
    Unsettled = "Unsettled"
    PartialSettled = "PartialSettled"
    None_ = "None"

    @classmethod
    def default(cls) -> "OrderPaymentStatus":
        return cls.Unsettled


def enum_rank(value: StrEnum) -> int:
    """按声明顺序排序用（集合渲染保持稳定输出）。"""
    return list(type(value)).index(value)
