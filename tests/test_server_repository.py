"""服务器基础信息仓储与关联明细仓储测试。"""
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import DatabaseError
from app.repositories.server_basic import ServerBasicRepository
from app.repositories.server_relations import (
    ServerDiskRepository,
    ServerNetworkRepository,
    ServerPartitionRepository,
    ServerRepositoryRepository,
)
from app.schemas.server import FilterOptions


def _sql(stmt) -> str:
    return str(stmt.compile(compile_kwargs={"literal_binds": True}))


class _BrokenSession:
    """execute 时抛出驱动异常的假会话。"""

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def execute(self, query):
        raise OperationalError("SELECT 1", {}, Exception("connection refused by 10.1.2.3"))


def _broken_factory():
    return _BrokenSession()


class TestBuildQuery:
    def test_no_options_means_no_where_clause(self):
        stmt = ServerBasicRepository().build_query(FilterOptions())
        assert "WHERE" not in _sql(stmt)

    def test_os_predicate(self):
        sql = _sql(ServerBasicRepository().build_query(FilterOptions(os="win")))
        assert "server_basic.os = 1" in sql
        sql = _sql(ServerBasicRepository().build_query(FilterOptions(os="lin")))
        assert "server_basic.os = 2" in sql

    def test_state_predicate(self):
        sql = _sql(ServerBasicRepository().build_query(FilterOptions(state="connect")))
        assert "server_basic.status = 'connect'" in sql

    def test_license_predicates(self):
        repo = ServerBasicRepository()
        assert "server_basic.license_id > 0" in _sql(repo.build_query(FilterOptions(license="assign")))
        assert "server_basic.license_id = 0" in _sql(repo.build_query(FilterOptions(license="unassign")))
        assert "WHERE" not in _sql(repo.build_query(FilterOptions(license="other")))

    def test_predicates_are_anded(self):
        sql = _sql(ServerBasicRepository().build_query(FilterOptions(os="win", state="connect", license="assign")))
        assert sql.count(" AND ") == 2

    def test_name_predicate_is_mandatory(self):
        sql = _sql(ServerBasicRepository().build_query(FilterOptions(), system_name="win-01"))
        assert "server_basic.system_name = 'win-01'" in sql

    def test_builder_state_does_not_leak_between_calls(self):
        repo = ServerBasicRepository()
        repo.build_query(FilterOptions(os="win", state="connect"), system_name="win-01")
        assert "WHERE" not in _sql(repo.build_query(FilterOptions()))


class TestServerBasicRepository:
    async def test_find_all_without_filters(self, session_factory, seeded_servers):
        servers = await ServerBasicRepository(session_factory).find_all(FilterOptions())
        assert [s.system_name for s in servers] == ["win-01", "lin-01", "win-02"]

    async def test_find_all_with_filters(self, session_factory, seeded_servers):
        repo = ServerBasicRepository(session_factory)
        servers = await repo.find_all(FilterOptions(os="win", state="disconnect"))
        assert [s.system_name for s in servers] == ["win-02"]
        servers = await repo.find_all(FilterOptions(license="unassign"))
        assert [s.system_name for s in servers] == ["win-01"]

    async def test_find_all_no_match_returns_empty_list(self, session_factory, seeded_servers):
        servers = await ServerBasicRepository(session_factory).find_all(FilterOptions(os="lin", state="connect"))
        assert servers == []

    async def test_find_by_name_combines_filters(self, session_factory, seeded_servers):
        repo = ServerBasicRepository(session_factory)
        assert len(await repo.find_by_name("lin-01", FilterOptions())) == 1
        assert await repo.find_by_name("lin-01", FilterOptions(os="win")) == []

    async def test_find_by_id(self, session_factory, seeded_servers):
        target = seeded_servers[1]
        servers = await ServerBasicRepository(session_factory).find_by_id(target.id, FilterOptions())
        assert [s.system_name for s in servers] == ["lin-01"]

    async def test_storage_failure_is_wrapped(self):
        with pytest.raises(DatabaseError) as exc_info:
            await ServerBasicRepository(_broken_factory).find_all(FilterOptions())
        assert "10.1.2.3" not in exc_info.value.message


class TestRelationRepositories:
    @pytest.mark.parametrize("repo_cls", [
        ServerDiskRepository, ServerNetworkRepository, ServerPartitionRepository, ServerRepositoryRepository,
    ])
    async def test_empty_names_issue_no_query(self, repo_cls):
        factory = MagicMock()
        assert await repo_cls(factory).find_by_system_names([]) == []
        factory.assert_not_called()

    async def test_find_by_system_names(self, session_factory, seeded_servers):
        disks = await ServerDiskRepository(session_factory).find_by_system_names(["win-01", "lin-01"])
        assert len(disks) == 2
        assert {d.system_name for d in disks} == {"win-01"}

    async def test_unknown_names_return_empty(self, session_factory, seeded_servers):
        assert await ServerNetworkRepository(session_factory).find_by_system_names(["nope"]) == []

    async def test_failure_names_relation_kind(self):
        with pytest.raises(DatabaseError) as exc_info:
            await ServerPartitionRepository(_broken_factory).find_by_system_names(["win-01"])
        assert "partition" in exc_info.value.message
        assert "connection refused" not in exc_info.value.message
