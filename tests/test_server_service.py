"""服务器资产查询服务测试：合并逻辑与关联查询编排。"""
import asyncio
from unittest.mock import AsyncMock

import pytest

from app.core.exceptions import DatabaseError, InternalError, NotFoundError
from app.models.server import ServerBasic, ServerDisk, ServerNetwork, ServerPartition
from app.schemas.server import FilterOptions
from app.services.server_service import ServerService, combine_server_data


def _servers(*names: str) -> list[ServerBasic]:
    return [ServerBasic(id=i + 1, system_name=name, status="connect", license_id=0) for i, name in enumerate(names)]


def _mocked_service(servers: list[ServerBasic]) -> ServerService:
    service = ServerService(session_factory=object())
    service.basic_repository.find_all = AsyncMock(return_value=servers)
    service.basic_repository.find_by_name = AsyncMock(return_value=servers[:1])
    service.basic_repository.find_by_id = AsyncMock(return_value=servers[:1])
    for repo in (service.disk_repository, service.network_repository,
                 service.partition_repository, service.repository_repository):
        repo.find_by_system_names = AsyncMock(return_value=[])
    return service


class TestCombineServerData:
    def test_only_servers(self):
        result = combine_server_data(_servers("a", "b"))
        assert [agg.server.system_name for agg in result] == ["a", "b"]
        assert all(agg.disk is None and agg.network is None for agg in result)

    def test_relations_grouped_by_name(self):
        disks = [
            ServerDisk(system_name="a", disk_num=0),
            ServerDisk(system_name="b", disk_num=0),
            ServerDisk(system_name="a", disk_num=1),
        ]
        networks = [ServerNetwork(system_name="b", network_name="eth0")]
        result = combine_server_data(_servers("a", "b"), disks=disks, networks=networks)
        assert [d.disk_num for d in result[0].disk] == [0, 1]
        assert result[0].network is None
        assert len(result[1].disk) == 1
        assert result[1].network[0].network_name == "eth0"

    def test_orphan_rows_dropped(self):
        result = combine_server_data(
            _servers("a"), partitions=[ServerPartition(system_name="ghost", letter="/")],
        )
        assert len(result) == 1
        assert result[0].partition is None

    def test_order_follows_base_records(self):
        result = combine_server_data(
            _servers("z", "a", "m"), disks=[ServerDisk(system_name="m"), ServerDisk(system_name="z")],
        )
        assert [agg.server.system_name for agg in result] == ["z", "a", "m"]

    def test_empty_servers(self):
        assert combine_server_data([], disks=[ServerDisk(system_name="a")]) == []


class TestServerService:
    async def test_list_without_relation_flags_skips_relation_fetches(self):
        service = _mocked_service(_servers("a", "b"))
        result = await service.list_servers(FilterOptions(detail=True))
        assert [agg.server.system_name for agg in result] == ["a", "b"]
        service.disk_repository.find_by_system_names.assert_not_awaited()
        service.network_repository.find_by_system_names.assert_not_awaited()

    async def test_only_requested_relations_fetched(self):
        service = _mocked_service(_servers("a", "b"))
        service.disk_repository.find_by_system_names.return_value = [ServerDisk(system_name="b")]
        result = await service.list_servers(FilterOptions(disk=True, repository=True))

        service.disk_repository.find_by_system_names.assert_awaited_once_with(["a", "b"])
        service.repository_repository.find_by_system_names.assert_awaited_once_with(["a", "b"])
        service.network_repository.find_by_system_names.assert_not_awaited()
        service.partition_repository.find_by_system_names.assert_not_awaited()
        assert result[0].disk is None
        assert len(result[1].disk) == 1

    async def test_no_servers_means_no_relation_fetches(self):
        service = _mocked_service([])
        assert await service.get_servers_with_relations(FilterOptions(disk=True, network=True)) == []
        service.disk_repository.find_by_system_names.assert_not_awaited()

    async def test_relation_failure_fails_whole_request(self):
        service = _mocked_service(_servers("a"))
        service.network_repository.find_by_system_names.side_effect = DatabaseError("network query failed")
        with pytest.raises(DatabaseError):
            await service.list_servers(FilterOptions(disk=True, network=True))

    async def test_failure_cancels_other_fetches(self):
        service = _mocked_service(_servers("a"))
        started = asyncio.Event()
        cancelled = asyncio.Event()

        async def slow_fetch(names):
            started.set()
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                cancelled.set()
                raise

        async def failing_fetch(names):
            await started.wait()
            raise DatabaseError("network query failed")

        service.disk_repository.find_by_system_names.side_effect = slow_fetch
        service.network_repository.find_by_system_names.side_effect = failing_fetch
        with pytest.raises(DatabaseError):
            await service.list_servers(FilterOptions(disk=True, network=True))
        assert cancelled.is_set()

    async def test_unexpected_error_wrapped(self):
        service = _mocked_service(_servers("a"))
        service.disk_repository.find_by_system_names.side_effect = RuntimeError("boom")
        with pytest.raises(InternalError):
            await service.get_servers_with_relations(FilterOptions(disk=True))

    async def test_get_by_name_not_found(self):
        service = _mocked_service([])
        with pytest.raises(NotFoundError):
            await service.get_server_by_name("missing", FilterOptions())

    async def test_get_by_id_with_relations(self):
        service = _mocked_service(_servers("a"))
        service.partition_repository.find_by_system_names.return_value = [ServerPartition(system_name="a")]
        aggregate = await service.get_server_by_id(1, FilterOptions(partition=True))
        assert aggregate.server.system_name == "a"
        assert len(aggregate.partition) == 1
        service.basic_repository.find_by_id.assert_awaited_once()

    async def test_against_database(self, session_factory, seeded_servers):
        service = ServerService(session_factory)
        result = await service.list_servers(
            FilterOptions(disk=True, network=True, partition=True, repository=True)
        )
        by_name = {agg.server.system_name: agg for agg in result}
        assert list(by_name) == ["win-01", "lin-01", "win-02"]
        assert len(by_name["win-01"].disk) == 2
        assert len(by_name["win-01"].network) == 1
        assert len(by_name["win-01"].repository) == 1
        assert by_name["win-01"].partition is None
        assert len(by_name["lin-01"].partition) == 1
        assert by_name["win-02"].disk is None
