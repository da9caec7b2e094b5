"""
HTTP surface tests via FastAPI TestClient.
"""

import pytest
from fastapi.testclient import TestClient

from contour.api.contour import get_resolver_registry
from contour.main import app
from contour.models.module import ModuleId
from contour.services.detectors.currency import apply_rate
from contour.services.resolvers import BaseResolver, ResolverRegistry


class FixedRateResolver(BaseResolver):
    @property
    def module_id(self) -> ModuleId:
        return ModuleId.CURRENCY

    async def _resolve(self, partial):
        return apply_rate(partial, 2.0)


@pytest.fixture()
def client():
    registry = ResolverRegistry()
    registry.register(FixedRateResolver())
    app.dependency_overrides[get_resolver_registry] = lambda: registry
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["message"] == "Contour Engine API"


def test_health(client):
    body = client.get("/api/health/").json()
    assert body["status"] == "healthy"
    assert body["detectors"] == 10
    assert body["commands"] > 0
    assert body["resolvers"] == ["currency"]


def test_detect_auto(client):
    body = client.post("/api/contour/detect", json={"text": "5km to miles"}).json()
    assert body["matched"] is True
    assert body["module"]["id"] == "units"
    assert body["module"]["focused"] is False
    assert body["module"]["units"]["to_unit"] == "mi"


def test_detect_no_match(client):
    body = client.post("/api/contour/detect", json={"text": "good morning"}).json()
    assert body == {"matched": False, "module": None}


def test_detect_focused_placeholder(client):
    body = client.post("/api/contour/detect", json={"text": "", "module_id": "timer"}).json()
    assert body["matched"] is False
    assert body["module"]["id"] == "timer"
    assert body["module"]["focused"] is True


def test_detect_unknown_module(client):
    response = client.post("/api/contour/detect", json={"text": "1+1", "module_id": "teleporter"})
    assert response.status_code == 404


def test_detect_does_not_resolve(client):
    body = client.post("/api/contour/detect", json={"text": "50 usd to eur"}).json()
    assert body["module"]["currency"]["is_loading"] is True


def test_resolve_currency(client):
    body = client.post("/api/contour/resolve", json={"text": "50 usd to eur"}).json()
    currency = body["module"]["currency"]
    assert currency["is_loading"] is False
    assert currency["rate"] == 2.0
    assert currency["to_value"] == 100.0


def test_resolve_without_resolver_leaves_loading(client):
    body = client.post("/api/contour/resolve", json={"text": "define ephemeral"}).json()
    assert body["module"]["dictionary"]["is_loading"] is True


def test_commands_grouped(client):
    groups = client.get("/api/contour/commands", params={"q": "tim"}).json()
    ids = [cmd["id"] for group in groups for cmd in group["commands"]]
    assert "timer" in ids and "timezone" in ids
    assert all(group["label"] for group in groups)


def test_command_lookup(client):
    assert client.get("/api/contour/commands/currency").json()["handler"]["kind"] == "module"
    assert client.get("/api/contour/commands/nope").status_code == 404


def test_detector_order(client):
    order = client.get("/api/contour/detectors").json()["order"]
    assert order[0] == "color"
    assert order[-1] == "calculator"
