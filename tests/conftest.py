"""
测试基础配置

提供 SQLite 文件型异步数据库、FastAPI 测试客户端、用户与令牌等通用 fixture。
每个测试使用独立的临时数据库文件，不依赖外部 PostgreSQL。
使用文件数据库而不是 :memory:，保证并发的关联查询各自拿到独立连接时看到同一份数据。
"""
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# 必须在导入 app 之前设置环境变量，避免真实连接
import os
os.environ["POSTGRES_HOST"] = "localhost"
os.environ["POSTGRES_PORT"] = "5432"
os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-pytest-only"

from app.core.database import Base, get_session_factory
from app.core.security import create_access_token, hash_password
from app.models.server import ServerBasic, ServerDisk, ServerNetwork, ServerPartition, ServerRepository
from app.models.user import User

TEST_USER_PASSWORD = "Admin1234!"


# ── SQLite 异步引擎 ──────────────────────────────────────────────────

@pytest_asyncio.fixture
async def engine(tmp_path):
    """每个测试一个临时数据库文件，测试前建表，测试后释放连接。"""
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """提供一个干净的数据库会话。"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """提供配置好依赖覆盖的异步 HTTP 测试客户端。"""
    from app.main import app

    app.dependency_overrides[get_session_factory] = lambda: session_factory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ── 用户与令牌 ────────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """创建一个普通用户。"""
    user = User(
        email="admin@test.com",
        name="Admin",
        hashed_password=hash_password(TEST_USER_PASSWORD),
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def user_token(test_user: User) -> str:
    """用户的 JWT access token。"""
    return create_access_token(str(test_user.id))


@pytest_asyncio.fixture
async def auth_headers(user_token: str) -> dict:
    """认证头。"""
    return {"Authorization": f"Bearer {user_token}"}


# ── 服务器资产数据 ────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def seeded_servers(db_session: AsyncSession) -> list[ServerBasic]:
    """
    三台服务器及其关联明细：

    - win-01：Windows / Source / connect / 未分配许可证，带两块磁盘、一张网卡、一个存储库
    - lin-01：Linux / Target / disconnect / 许可证 42，带一个大小为 0 的分区
    - win-02：Windows / Recovery / disconnect / 许可证 7，无关联明细
    另有一条不属于任何服务器的磁盘记录 (ghost)。
    """
    servers = [
        ServerBasic(
            system_name="win-01", system_mode=1, os=1, os_version="Windows Server 2019",
            ip_address="10.0.0.1", status="connect", license_id=0, agent_version="2.1.0",
            model="PowerEdge R740", manufacturer="Dell", cpu_name="Intel Xeon Gold 6230",
            number_of_processors="2", total_physical_memory="17179869184",
        ),
        ServerBasic(
            system_name="lin-01", system_mode=2, os=2, os_version="Ubuntu 22.04",
            ip_address="10.0.0.2", status="disconnect", license_id=42,
        ),
        ServerBasic(
            system_name="win-02", system_mode=3, os=1, os_version="Windows Server 2022",
            ip_address="10.0.0.3", status="disconnect", license_id=7,
        ),
    ]
    db_session.add_all(servers)
    db_session.add_all([
        ServerDisk(system_name="win-01", disk_type=1, disk_num=0, disk_size="1073741824",
                   device="\\\\.\\PHYSICALDRIVE0", last_update_time="2024-05-01 10:00:00"),
        ServerDisk(system_name="win-01", disk_type=0, disk_num=1, disk_size="1024",
                   device="\\\\.\\PHYSICALDRIVE1"),
        ServerDisk(system_name="ghost", disk_type=1, disk_num=0, disk_size="2048", device="/dev/sdz"),
        ServerNetwork(system_name="win-01", network_name="Ethernet0", ip_address="10.0.0.1",
                      subnet="255.255.255.0", gateway="10.0.0.254", mac_address=None),
        ServerPartition(system_name="lin-01", letter="/", device="/dev/sda1", file_system="ext4",
                        part_size=0, part_used=0, part_free=0),
        ServerRepository(system_name="win-01", os=1, type=20, used_size=1024, free_size=2048,
                         local_path="D:\\backup", remote_path="\\\\nas\\backup",
                         remote_user="backup", remote_password="s3cret", ip_address="10.0.0.50"),
    ])
    await db_session.commit()
    for server in servers:
        await db_session.refresh(server)
    return servers
