# app/services/order_query_operators.py
"""
字段极性（reverse）→ 比较运算符。

每个可取反的过滤字段只声明自己的“种类”（等值 / 集合 / 模糊），
运算符文本统一从 OPERATOR_PAIRS 取，新增字段时只需在 FIELD_KINDS 里登记。
"""

from __future__ import annotations

from enum import StrEnum
from typing import AbstractSet, Optional


class FieldKind(StrEnum):
    EQUALITY = "equality"
    MEMBERSHIP = "membership"
    PATTERN = "pattern"


# kind -> (正向, 取反)
OPERATOR_PAIRS: dict[FieldKind, tuple[str, str]] = {
    FieldKind.EQUALITY: ("=", "!="),
    FieldKind.MEMBERSHIP: ("IN", "NOT IN"),
    FieldKind.PATTERN: ("LIKE", "NOT LIKE"),
}

# 可取反字段（日期区间不在此列：永远是闭区间 >= / <=）
FIELD_KINDS: dict[str, FieldKind] = {
    "id": FieldKind.EQUALITY,
    "created_by_user_id": FieldKind.EQUALITY,
    "updated_by_user_id": FieldKind.EQUALITY,
    "fuzzy": FieldKind.PATTERN,
    "warehouse_ids": FieldKind.MEMBERSHIP,
    "person_related_id": FieldKind.EQUALITY,
    "person_in_charge_id": FieldKind.EQUALITY,
    "order_type": FieldKind.EQUALITY,
    "order_payment_status": FieldKind.MEMBERSHIP,
    "order_category_id": FieldKind.EQUALITY,
    "currency": FieldKind.EQUALITY,
}


def resolve_operator(
    reverse: Optional[AbstractSet[str]], field: str, kind: FieldKind
) -> str:
    """field 在 reverse 里 → 取反运算符；否则正向。reverse 为 None 等同空集。"""
    positive, negative = OPERATOR_PAIRS[FieldKind(kind)]
    if reverse and field in reverse:
        return negative
    return positive


def eq_or_not(reverse: Optional[AbstractSet[str]], field: str) -> str:
    return resolve_operator(reverse, field, FieldKind.EQUALITY)


def in_or_not(reverse: Optional[AbstractSet[str]], field: str) -> str:
    return resolve_operator(reverse, field, FieldKind.MEMBERSHIP)


def like_or_not(reverse: Optional[AbstractSet[str]], field: str) -> str:
    return resolve_operator(reverse, field, FieldKind.PATTERN)
