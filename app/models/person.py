# app/models/person.py
from __future__ import annotations

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Person(Base):
    """
    往来人员（客户 / 供应商联系人 / 内部经办人）。
    订单通过 person_related_id、person_in_charge_id 两次引用本表，
    列表查询里分别别名为 persons_related / persons_in_charge。
    """

    __tablename__ = "persons"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Person id={self.id} name={self.name!r}>"
