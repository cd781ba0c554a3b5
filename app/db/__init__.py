# app/db/__init__.py
"""
数据库层：
- base.py     全局唯一 ORM Base + 模型注册
- session.py  异步 Engine / AsyncSession 工厂 + FastAPI 依赖
"""
