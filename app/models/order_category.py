# app/models/order_category.py
from __future__ import annotations

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class OrderCategory(Base):
    """订单分类/状态字典（orders.order_category_id → order_status_list.id）"""

    __tablename__ = "order_status_list"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<OrderCategory id={self.id} name={self.name!r}>"
