"""
数据模型包 (Data Models Package)

集中导出所有 SQLAlchemy ORM 模型：服务器资产及其关联明细、个人用户和企业账户。

Centrally exports all SQLAlchemy ORM models: server inventory with its relation
tables, personal users and business accounts.
"""
from app.models.server import ServerBasic, ServerDisk, ServerNetwork, ServerPartition, ServerRepository
from app.models.user import User
from app.models.business import BusinessAccount, BusinessAddress

# 导出所有模型类供外部模块使用 (Export all model classes for external modules)
__all__ = [
    "ServerBasic", "ServerDisk", "ServerNetwork", "ServerPartition", "ServerRepository",
    "User", "BusinessAccount", "BusinessAddress",
]
