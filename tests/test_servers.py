"""服务器资产接口测试。"""
from httpx import AsyncClient

API = "/api/v1/servers"


class TestListServers:
    async def test_list_all(self, client: AsyncClient, seeded_servers):
        resp = await client.get(API)
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert [s["systemName"] for s in body["data"]] == ["win-01", "lin-01", "win-02"]
        first = body["data"][0]
        assert first == {
            "systemName": "win-01",
            "systemMode": "Source",
            "os": "Window",
            "version": "Windows Server 2019",
            "ip": "10.0.0.1",
            "status": "connect",
            "licenseID": "Unassigned",
        }

    async def test_public_endpoint(self, client: AsyncClient, seeded_servers):
        resp = await client.get(API)
        assert resp.status_code == 200

    async def test_filter_os_and_state(self, client: AsyncClient, seeded_servers):
        resp = await client.get(API, params={"os": "win", "state": "disconnect"})
        assert [s["systemName"] for s in resp.json()["data"]] == ["win-02"]

    async def test_filter_license(self, client: AsyncClient, seeded_servers):
        resp = await client.get(API, params={"license": "assign"})
        data = resp.json()["data"]
        assert [s["systemName"] for s in data] == ["lin-01", "win-02"]
        assert data[0]["licenseID"] == 42

    async def test_empty_string_filters_are_ignored(self, client: AsyncClient, seeded_servers):
        resp = await client.get(API, params={"os": "", "state": ""})
        assert len(resp.json()["data"]) == 3

    async def test_no_match_returns_empty_list(self, client: AsyncClient, seeded_servers):
        resp = await client.get(API, params={"os": "lin", "state": "connect"})
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "data": []}

    async def test_empty_table(self, client: AsyncClient):
        resp = await client.get(API, params={"disk": "true"})
        assert resp.status_code == 200
        assert resp.json()["data"] == []

    async def test_invalid_os_rejected(self, client: AsyncClient, seeded_servers):
        resp = await client.get(API, params={"os": "mac"})
        assert resp.status_code == 400
        body = resp.json()
        assert body["success"] is False
        assert body["error"]["code"] == "validation_error"

    async def test_invalid_flag_rejected(self, client: AsyncClient, seeded_servers):
        resp = await client.get(API, params={"disk": "yes"})
        assert resp.status_code == 400

    async def test_detail_with_relations(self, client: AsyncClient, seeded_servers):
        resp = await client.get(API, params={
            "detail": "true", "disk": "true", "network": "TRUE", "partition": "true", "repository": "True",
        })
        assert resp.status_code == 200
        servers = {s["systemName"]: s for s in resp.json()["data"]}

        win = servers["win-01"]
        assert win["memory"] == "16.00 GB"
        assert win["manufacturer"] == "Dell"
        assert [d["diskType"] for d in win["disks"]] == ["Gpt", "Bios"]
        assert win["disks"][0]["diskSize"] == "1073741824 (1.00 GB)"
        assert win["disks"][0]["lastUpdated"] == "2024-05-01 10:00:00"
        assert win["disks"][1]["diskSize"] == "1024 (1.00 KB)"
        assert win["networks"][0]["macAddress"] == "-"
        assert win["repositories"][0]["type"] == "Network"
        assert "partitions" not in win

        lin = servers["lin-01"]
        assert lin["partitions"][0]["usage"] == "N/A"
        assert "disks" not in lin

        win2 = servers["win-02"]
        for key in ("disks", "networks", "partitions", "repositories"):
            assert key not in win2

    async def test_repository_credentials_never_returned(self, client: AsyncClient, seeded_servers):
        resp = await client.get(API, params={"detail": "true", "repository": "true"})
        assert "s3cret" not in resp.text
        assert "remotePassword" not in resp.text

    async def test_relations_without_detail_use_basic_view(self, client: AsyncClient, seeded_servers):
        resp = await client.get(API, params={"disk": "true"})
        first = resp.json()["data"][0]
        assert "disks" not in first
        assert "memory" not in first


class TestSingleServer:
    async def test_get_by_name(self, client: AsyncClient, seeded_servers):
        resp = await client.get(f"{API}/name/lin-01")
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["systemName"] == "lin-01"
        assert data["systemMode"] == "Target"
        assert data["os"] == "Linux"

    async def test_get_by_name_with_detail(self, client: AsyncClient, seeded_servers):
        resp = await client.get(f"{API}/name/win-01", params={"detail": "true", "disk": "true"})
        data = resp.json()["data"]
        assert len(data["disks"]) == 2
        assert "networks" not in data

    async def test_get_by_name_not_found(self, client: AsyncClient, seeded_servers):
        resp = await client.get(f"{API}/name/missing")
        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "not_found"

    async def test_get_by_name_filtered_out(self, client: AsyncClient, seeded_servers):
        resp = await client.get(f"{API}/name/lin-01", params={"os": "win"})
        assert resp.status_code == 404

    async def test_get_by_id(self, client: AsyncClient, seeded_servers):
        server_id = seeded_servers[2].id
        resp = await client.get(f"{API}/id/{server_id}")
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["systemName"] == "win-02"
        assert data["systemMode"] == "Recovery"
        assert data["licenseID"] == 7

    async def test_get_by_id_not_found(self, client: AsyncClient, seeded_servers):
        resp = await client.get(f"{API}/id/999999")
        assert resp.status_code == 404

    async def test_get_by_non_numeric_id(self, client: AsyncClient, seeded_servers):
        resp = await client.get(f"{API}/id/abc")
        assert resp.status_code == 400
