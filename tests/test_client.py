import asyncio

import httpx
import pytest

from chooser.client import ChooserAPIError, ChooserClient


def _client(app):
    return ChooserClient("http://testserver", transport=httpx.ASGITransport(app=app))


def test_client_flow(app):
    async def scenario():
        async with _client(app) as api:
            assert (await api.health())["status"] == "ok"
            assert "simple_poll" in {t["slug"] for t in await api.templates()}

            created = await api.create("simple_poll", "Lunch")
            cid, admin = created["instance_id"], created["admin_id"]
            await api.replace_options(cid, admin, [{"value": "Pizza", "order": 0}])
            await api.publish(cid, admin)

            pizza = (await api.get(cid))["options"][0]["id"]
            await api.submit(cid, "Alice", [{"option_id": pizza, "selection_value": "ideal"}])
            return await api.results(cid)

    data = asyncio.run(scenario())
    assert data["options"][0]["summary"] == {"no": 0, "ok": 0, "ideal": 1}
    assert data["participants"] == ["Alice"]


def test_client_raises_api_error(app):
    async def scenario():
        async with _client(app) as api:
            await api.get("missing1")

    with pytest.raises(ChooserAPIError) as exc:
        asyncio.run(scenario())
    assert exc.value.status_code == 404
    assert exc.value.message == "Chooser not found"
