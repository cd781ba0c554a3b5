# app/models/order.py
from __future__ import annotations

from typing import TYPE_CHECKING, List

from sqlalchemy import BigInteger, Double, ForeignKey, Index, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.enums import OrderCurrency, OrderPaymentStatus, OrderType

if TYPE_CHECKING:
    from app.models.order_item import OrderItem


def _enum_values(enum_cls) -> list[str]:
    return [m.value for m in enum_cls]


class Order(Base):
    """
    订单主档：
    - 审计字段 created_by_user_id / updated_by_user_id / date / last_updated_date 由系统生成
      （date / last_updated_date 为整数 epoch）
    - order_type 必填；currency 默认 Unknown；order_payment_status 默认 Unsettled
    - 行项目 items 归属于订单，随订单级联删除
    """

    __tablename__ = "orders"
    __table_args__ = (
        Index("ix_orders_type_payment", "order_type", "order_payment_status"),
        Index("ix_orders_date", "date"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)

    created_by_user_id: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    updated_by_user_id: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    date: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    last_updated_date: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    warehouse_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("warehouses.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    person_related_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("persons.id", ondelete="RESTRICT"), nullable=False
    )
    person_in_charge_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("persons.id", ondelete="RESTRICT"), nullable=False
    )
    order_category_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("order_status_list.id", ondelete="RESTRICT"), nullable=False
    )
    # 来源访客单（0 = 无）
    from_guest_order_id: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    # 枚举按名称落库（与 StrEnum 的规范字符串一致）
    order_type: Mapped[OrderType] = mapped_column(
        SAEnum(OrderType, name="order_type", values_callable=_enum_values), nullable=False
    )
    currency: Mapped[OrderCurrency] = mapped_column(
        SAEnum(OrderCurrency, name="order_currency", values_callable=_enum_values),
        nullable=False,
        default=OrderCurrency.Unknown,
    )
    order_payment_status: Mapped[OrderPaymentStatus] = mapped_column(
        SAEnum(OrderPaymentStatus, name="order_payment_status", values_callable=_enum_values),
        nullable=False,
        default=OrderPaymentStatus.Unsettled,
    )

    total_amount: Mapped[float] = mapped_column(Double, nullable=False, default=0.0)
    total_amount_settled: Mapped[float] = mapped_column(Double, nullable=False, default=0.0)

    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    items: Mapped[List["OrderItem"]] = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OrderItem.id",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Order id={self.id} type={self.order_type} payment={self.order_payment_status}>"
