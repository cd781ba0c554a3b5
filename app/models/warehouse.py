# app/models/warehouse.py
from __future__ import annotations

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Warehouse(Base):
    """
    仓库主档（最小字段集）：
    - id:    主键
    - name:  仓库名称（订单列表 warehouse_name 的来源，参与模糊搜索）
    """

    __tablename__ = "warehouses"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<Warehouse id={self.id} name={self.name!r}>"
