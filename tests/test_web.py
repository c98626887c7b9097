import pytest

from todoapp.errors import StorageUnavailable

pytestmark = pytest.mark.anyio


async def test_page_lists_users(web_client, data_client):
    await data_client.create_user("alice", "p1")

    res = await web_client.get("/")
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/html")
    assert res.headers["cache-control"] == "no-store"
    assert "alice" in res.text


async def test_page_reflects_new_users_per_request(web_client, data_client):
    first = await web_client.get("/")
    assert "bob" not in first.text

    await data_client.create_user("bob", "pw")
    second = await web_client.get("/")
    assert "bob" in second.text


async def test_storage_failure_is_server_error(web_client, data_client, monkeypatch):
    async def down():
        raise StorageUnavailable("connection refused")

    monkeypatch.setattr(data_client, "list_users", down)
    res = await web_client.get("/")
    assert res.status_code == 500
