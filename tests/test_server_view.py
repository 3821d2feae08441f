"""服务器响应整形测试。"""
from app.models.server import ServerBasic, ServerDisk, ServerNetwork, ServerPartition, ServerRepository
from app.schemas.server import OSType, OS_TYPE_LABELS, ServerAggregate
from app.services.server_view import (
    format_disk_size,
    format_size_with_bytes,
    format_usage,
    lookup_label,
    shape_server,
    shape_servers,
    to_network_info,
    to_repository_info,
)


def _server(**overrides) -> ServerBasic:
    values = dict(
        system_name="srv-01", system_mode=1, os=1, os_version="Windows Server 2019",
        ip_address="10.0.0.1", status="connect", license_id=0, agent_version="2.1.0",
        model="R740", manufacturer="Dell", cpu_name="Xeon", number_of_processors="2",
        total_physical_memory="1073741824",
    )
    values.update(overrides)
    return ServerBasic(**values)


class TestFormatDiskSize:
    def test_units(self):
        assert format_disk_size("1024") == "1.00 KB"
        assert format_disk_size("1073741824") == "1.00 GB"
        assert format_disk_size(512) == "512.00 B"
        assert format_disk_size(1536) == "1.50 KB"

    def test_caps_at_petabytes(self):
        assert format_disk_size(str(1024 ** 6)) == "1024.00 PB"

    def test_zero_and_non_numeric_returned_unchanged(self):
        assert format_disk_size("0") == "0"
        assert format_disk_size(0) == "0"
        assert format_disk_size("abc") == "abc"

    def test_leading_integer_is_parsed(self):
        assert format_disk_size("1536.0") == "1.50 KB"
        assert format_disk_size("1024 bytes") == "1.00 KB"
        assert format_disk_size(" 2048") == "2.00 KB"

    def test_no_leading_integer_returned_unchanged(self):
        assert format_disk_size("bytes 1024") == "bytes 1024"
        assert format_disk_size("0.5") == "0.5"

    def test_unconvertible_value_is_unknown(self):
        assert format_disk_size("9" * 400) == "Unknown"

    def test_missing_is_unknown(self):
        assert format_disk_size(None) == "Unknown"

    def test_with_bytes(self):
        assert format_size_with_bytes("1024") == "1024 (1.00 KB)"
        assert format_size_with_bytes(None) == "Unknown"


class TestLabels:
    def test_known_and_unknown_codes(self):
        assert lookup_label(2, OSType, OS_TYPE_LABELS) == "Linux"
        assert lookup_label(99, OSType, OS_TYPE_LABELS) == "Unknown"
        assert lookup_label(None, OSType, OS_TYPE_LABELS) == "Unknown"

    def test_usage(self):
        assert format_usage(50, 200) == "25.00%"
        assert format_usage(0, 0) == "N/A"


class TestRelationViews:
    def test_missing_mac_renders_dash(self):
        info = to_network_info(ServerNetwork(system_name="srv-01", network_name="eth0", mac_address=None))
        assert info.mac_address == "-"
        assert info.subnet == "Unknown"

    def test_repository_view_has_no_credentials(self):
        repo = ServerRepository(
            system_name="srv-01", os=2, type=30, used_size=0, free_size=2048,
            remote_user="admin", remote_password="hunter2", remote_domain="CORP",
        )
        dumped = to_repository_info(repo).model_dump(by_alias=True)
        assert dumped["type"] == "Cloud Storage"
        assert dumped["os"] == "Linux"
        assert dumped["free"] == "2048 (2.00 KB)"
        assert "hunter2" not in str(dumped)
        assert not any("remote_user" in key or "Password" in key for key in dumped)


class TestShapeServer:
    def test_basic_view(self):
        shaped = shape_server(ServerAggregate(server=_server()), detail=False)
        assert shaped == {
            "systemName": "srv-01",
            "systemMode": "Source",
            "os": "Window",
            "version": "Windows Server 2019",
            "ip": "10.0.0.1",
            "status": "connect",
            "licenseID": "Unassigned",
        }

    def test_unknown_codes_and_assigned_license(self):
        shaped = shape_server(ServerAggregate(server=_server(system_mode=7, os=9, license_id=42)), detail=False)
        assert shaped["systemMode"] == "Unknown"
        assert shaped["os"] == "Unknown"
        assert shaped["licenseID"] == 42

    def test_detail_view_omits_empty_arrays(self):
        shaped = shape_server(ServerAggregate(server=_server()), detail=True)
        assert shaped["memory"] == "1.00 GB"
        assert shaped["agentVersion"] == "2.1.0"
        for key in ("disks", "networks", "partitions", "repositories"):
            assert key not in shaped

    def test_detail_view_with_relations(self):
        aggregate = ServerAggregate(
            server=_server(),
            disk=[ServerDisk(system_name="srv-01", disk_type=1, disk_size="2048", device="sda")],
            partition=[ServerPartition(system_name="srv-01", letter="C:", part_size=100, part_used=25, part_free=75)],
        )
        shaped = shape_server(aggregate, detail=True)
        assert shaped["disks"] == [{
            "device": "sda", "diskType": "Gpt", "diskSize": "2048 (2.00 KB)", "lastUpdated": "Unknown",
        }]
        assert shaped["partitions"][0]["usage"] == "25.00%"
        assert "networks" not in shaped

    def test_relations_ignored_in_basic_view(self):
        aggregate = ServerAggregate(
            server=_server(), disk=[ServerDisk(system_name="srv-01", disk_type=0, disk_size="1")],
        )
        assert "disks" not in shape_server(aggregate, detail=False)

    def test_shape_servers_keeps_order(self):
        aggregates = [ServerAggregate(server=_server(system_name=name)) for name in ("b", "a", "c")]
        assert [s["systemName"] for s in shape_servers(aggregates, detail=False)] == ["b", "a", "c"]
