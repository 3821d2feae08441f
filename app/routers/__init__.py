"""
路由模块包 (Router Module Package)

按功能域组织的 REST API 路由，统一挂载在 settings.api_prefix（默认 /api/v1）之下。

路由模块组织结构 (Router Module Organization):
- servers.py: 服务器资产查询（列表、按名称、按 ID）
- users.py: 个人用户管理（CRUD、按邮箱查询）
- auth.py: 用户登录与访问令牌签发
- businesses.py: 企业账户（营业执照号校验、注册、更新、停用）
"""
