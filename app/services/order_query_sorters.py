# app/services/order_query_sorters.py
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Tuple


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


DEFAULT_DIRECTION = SortDirection.ASC


def parse_direction(raw: str | None) -> SortDirection:
    """大小写不敏感；缺省或无法识别时回落默认方向（不报错）。"""
    v = (raw or "").strip().lower()
    if v == SortDirection.DESC:
        return SortDirection.DESC
    if v == SortDirection.ASC:
        return SortDirection.ASC
    return DEFAULT_DIRECTION


def parse_sort_token(token: str) -> Tuple[str, SortDirection]:
    """
    "field[:direction]" → (field, direction)

    - 只按第一个 ":" 切分
    - 不校验列名（白名单校验由条件编译负责）
    """
    col, _, direction = (token or "").partition(":")
    return col.strip(), parse_direction(direction)


def format_sort_token(column: str, direction: SortDirection = DEFAULT_DIRECTION) -> str:
    return f"{column}:{SortDirection(direction).value}"


@dataclass(frozen=True)
class SortTerm:
    column: str
    direction: SortDirection = DEFAULT_DIRECTION

    @classmethod
    def parse(cls, token: str) -> "SortTerm":
        col, direction = parse_sort_token(token)
        return cls(column=col, direction=direction)

    @property
    def token(self) -> str:
        return format_sort_token(self.column, self.direction)
