# app/services/order_query_conditions.py
"""
订单列表查询条件编译：GetOrdersQuery → WHERE / ORDER BY 片段。

两种产出，同一套子句模板：
- build_where(q).sql / .params / .to_text()：绑定参数版（执行用）
- compile_where(q) == build_where(q).render()：字面量版（日志 / 对账 / 调试）

约定（调用方拼 SQL 时依赖）：
- 表 / 别名：orders, persons_related, persons_in_charge, warehouses, order_status_list
- 没有任何条件时返回空串，不输出 WHERE / ORDER BY 关键字
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import AbstractSet, Any, Dict, Iterable, List, Optional, Set

from sqlalchemy import bindparam, text
from sqlalchemy.sql.elements import TextClause

from app.models.enums import enum_rank
from app.obs.metrics import order_query_compiled_total, order_query_rejected_total
from app.schemas.order_query import FILTER_FIELDS, GetOrdersQuery
from app.services.order_query_errors import InvalidFilterField, InvalidSortField
from app.services.order_query_operators import FIELD_KINDS, FieldKind, resolve_operator
from app.services.order_query_sorters import SortTerm

log = logging.getLogger("erp.orders.query")

ORDER_TABLE = "orders"

# fuzzy 命中的五列（顺序固定）
FUZZY_COLUMNS: tuple[str, ...] = (
    "CAST(orders.id AS TEXT)",
    "persons_related.name",
    "persons_in_charge.name",
    "order_status_list.name",
    "warehouses.name",
)

# 外键列排序时换成 join 出来的展示名
SORT_COLUMN_ALIASES: dict[str, str] = {
    "warehouse_id": "warehouse_name",
    "person_related_id": "person_related_name",
    "person_in_charge_id": "person_in_charge_name",
    "order_category_id": "order_status_name",
}

# 可排序列白名单（orders 表的列）
SORTABLE_COLUMNS: frozenset[str] = frozenset(
    {
        "id",
        "created_by_user_id",
        "updated_by_user_id",
        "date",
        "last_updated_date",
        "person_in_charge_id",
        "order_category_id",
        "from_guest_order_id",
        "currency",
        "total_amount",
        "total_amount_settled",
        "order_payment_status",
        "warehouse_id",
        "person_related_id",
        "description",
        "order_type",
    }
)

_BIND_RE = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


def sql_literal(value: Any) -> str:
    """字面量渲染：数字原样，字符串 / 枚举单引号包裹（内部 ' 转义为 ''），序列渲染为 (a,b,c)。"""
    if isinstance(value, (list, tuple)):
        return "(" + ",".join(sql_literal(v) for v in value) + ")"
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float)):
        return str(value)
    s = str(value).replace("'", "''")
    return f"'{s}'"


@dataclass
class WhereClause:
    clauses: List[str] = field(default_factory=list)
    params: Dict[str, Any] = field(default_factory=dict)
    expanding: Set[str] = field(default_factory=set)

    def __bool__(self) -> bool:
        return bool(self.clauses)

    @property
    def sql(self) -> str:
        if not self.clauses:
            return ""
        return "WHERE " + " AND ".join(self.clauses)

    def render(self) -> str:
        """把 :name 替换成字面量（只扫描模板本身，替换进去的值不会被二次解析）。"""
        sql = self.sql
        if not sql:
            return ""

        def _sub(m: re.Match) -> str:
            return sql_literal(self.params[m.group(1)])

        return _BIND_RE.sub(_sub, sql)

    def to_text(self, prefix: str = "", suffix: str = "") -> TextClause:
        """
        组装可执行语句：prefix + WHERE... + suffix。
        集合参数声明为 expanding，IN :name 由 SQLAlchemy 展开。
        """
        parts = [p for p in (prefix.strip(), self.sql, suffix.strip()) if p]
        stmt = text("\n".join(parts))
        if self.expanding:
            stmt = stmt.bindparams(*(bindparam(name, expanding=True) for name in sorted(self.expanding)))
        return stmt


class ConditionBuilder:
    """按字段累积子句模板 + 绑定参数；运算符一律按 FIELD_KINDS 经 resolve_operator 取。"""

    def __init__(self, reverse: Optional[AbstractSet[str]] = None) -> None:
        self.reverse = reverse or frozenset()
        self._where = WhereClause()

    def _bind(self, name: str, value: Any, *, expanding: bool = False) -> str:
        if name in self._where.params:
            raise ValueError(f"duplicate bind name: {name}")
        self._where.params[name] = value
        if expanding:
            self._where.expanding.add(name)
        return f":{name}"

    def _op(self, name: str, shape: FieldKind) -> str:
        """种类以 FIELD_KINDS 登记为准；未登记或与子句形状不符直接报错。"""
        kind = FIELD_KINDS.get(name)
        if kind is None:
            raise ValueError(f"filter field not registered in FIELD_KINDS: {name}")
        if kind != shape:
            raise ValueError(f"filter field {name} is declared {kind.value}, used as {shape.value}")
        return resolve_operator(self.reverse, name, kind)

    def equal(self, name: str, value: Any, *, column: Optional[str] = None) -> None:
        op = self._op(name, FieldKind.EQUALITY)
        col = column or f"{ORDER_TABLE}.{name}"
        self._where.clauses.append(f"{col}{op}{self._bind(name, value)}")

    def member(self, name: str, values: Iterable[Any], *, column: str) -> None:
        op = self._op(name, FieldKind.MEMBERSHIP)
        ph = self._bind(name, list(values), expanding=True)
        self._where.clauses.append(f"{column} {op} {ph}")

    def pattern(self, name: str, value: str, *, columns: Iterable[str]) -> None:
        # 取反时五列统一 NOT LIKE，仍以 OR 连接；整体加括号保证是一个 AND 项
        op = self._op(name, FieldKind.PATTERN)
        # 输入里的 % / _ 不转义，按通配符生效（现有匹配语义）
        ph = self._bind(name, f"%{value}%")
        ors = " OR ".join(f"{col} {op} {ph}" for col in columns)
        self._where.clauses.append(f"({ors})")

    def bound(self, name: str, value: Any, *, column: str, op: str) -> None:
        # 区间边界：不参与 reverse
        self._where.clauses.append(f"{column}{op}{self._bind(name, value)}")

    def build(self) -> WhereClause:
        return self._where


def _check_reverse(reverse: Optional[AbstractSet[str]]) -> None:
    for name in sorted(reverse or ()):
        if name not in FILTER_FIELDS:
            order_query_rejected_total.labels("invalid_filter_field").inc()
            log.warning("order query rejected: unknown reverse field %r", name)
            raise InvalidFilterField(field=name)


def build_where(q: GetOrdersQuery) -> WhereClause:
    """
    字段顺序固定（与字段声明顺序一致）：
    id, created_by_user_id, updated_by_user_id, fuzzy, warehouse_ids,
    person_related_id, person_in_charge_id, order_type, order_payment_status,
    order_category_id, currency, date_start, date_end,
    last_updated_date_start, last_updated_date_end
    """
    _check_reverse(q.reverse)
    b = ConditionBuilder(q.reverse)

    if q.id is not None:
        b.equal("id", q.id)
    if q.created_by_user_id is not None:
        b.equal("created_by_user_id", q.created_by_user_id)
    if q.updated_by_user_id is not None:
        b.equal("updated_by_user_id", q.updated_by_user_id)
    if q.fuzzy is not None:
        b.pattern("fuzzy", q.fuzzy, columns=FUZZY_COLUMNS)
    if q.warehouse_ids is not None:
        b.member("warehouse_ids", sorted(q.warehouse_ids), column="orders.warehouse_id")
    if q.person_related_id is not None:
        b.equal("person_related_id", q.person_related_id)
    if q.person_in_charge_id is not None:
        b.equal("person_in_charge_id", q.person_in_charge_id)
    if q.order_type is not None:
        b.equal("order_type", q.order_type.value)
    if q.order_payment_status is not None:
        statuses = sorted(q.order_payment_status, key=enum_rank)
        b.member(
            "order_payment_status",
            [s.value for s in statuses],
            column="orders.order_payment_status",
        )
    if q.order_category_id is not None:
        b.equal("order_category_id", q.order_category_id)
    if q.currency is not None:
        b.equal("currency", q.currency.value)
    if q.date_start is not None:
        b.bound("date_start", q.date_start, column="orders.date", op=">=")
    if q.date_end is not None:
        b.bound("date_end", q.date_end, column="orders.date", op="<=")
    # 注意：这里的列名就是 last_updated_date_start / _end（不是 last_updated_date），保持现有行为
    if q.last_updated_date_start is not None:
        b.bound(
            "last_updated_date_start",
            q.last_updated_date_start,
            column="orders.last_updated_date_start",
            op=">=",
        )
    if q.last_updated_date_end is not None:
        b.bound(
            "last_updated_date_end",
            q.last_updated_date_end,
            column="orders.last_updated_date_end",
            op="<=",
        )

    where = b.build()
    order_query_compiled_total.labels("where").inc()
    log.debug("order where compiled: %s params=%s", where.sql, where.params)
    return where


def compile_where(q: GetOrdersQuery) -> str:
    return build_where(q).render()


def resolve_sort_term(token: str) -> SortTerm:
    term = SortTerm.parse(token)
    if term.column not in SORTABLE_COLUMNS:
        order_query_rejected_total.labels("invalid_sort_field").inc()
        log.warning("order query rejected: unknown sort field %r (token=%r)", term.column, token)
        raise InvalidSortField(token=token, column=term.column)
    return term


def build_order(q: GetOrdersQuery) -> List[SortTerm]:
    """按调用方顺序解析 + 白名单校验（未做别名映射）。"""
    return [resolve_sort_term(t) for t in (q.sorters or ())]


def sort_term_sql(term: SortTerm) -> str:
    alias = SORT_COLUMN_ALIASES.get(term.column)
    col = alias if alias else f"{ORDER_TABLE}.{term.column}"
    return f"{col} {term.direction.value}"


def compile_order(q: GetOrdersQuery) -> str:
    terms = build_order(q)
    if not terms:
        return ""
    order_query_compiled_total.labels("order").inc()
    return "ORDER BY " + ", ".join(sort_term_sql(t) for t in terms)

