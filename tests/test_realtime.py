import asyncio

import pytest

from app.core.config import get_settings
from app.db.models import Visit
from app.socket import events
from app.socket.server import sio

NAMESPACE = get_settings().SECURITY_NAMESPACE


class RecordingEmitter:
    def __init__(self, on_emit=None):
        self.calls = []
        self._on_emit = on_emit

    async def __call__(self, event, data=None, **kwargs):
        if self._on_emit:
            self._on_emit(event, data)
        self.calls.append((event, data, kwargs))


@pytest.fixture
def emitted(monkeypatch):
    emitter = RecordingEmitter()
    monkeypatch.setattr(sio, "emit", emitter)
    return emitter.calls


def _add_host(client):
    return client.post("/hosts", json={"full_name": "Grace Hopper", "email": "grace@example.com"}).json()["id"]


def _check_in(client, host_id, full_name="Ana"):
    body = {"full_name": full_name, "company": "Acme", "host_id": host_id, "purpose": "Meeting"}
    return client.post("/checkin", json=body).json()


def test_check_in_publishes_summary_after_commit(client, engine, session_factory, monkeypatch):
    seen_in_store = []
    open_transactions = []

    def _visible(event, data):
        raw = engine.raw_connection()
        try:
            open_transactions.append(raw.driver_connection.in_transaction)
        finally:
            raw.close()
        session = session_factory()
        try:
            seen_in_store.append(session.query(Visit).filter(Visit.id == data["data"]["id"]).count())
        finally:
            session.close()

    emitter = RecordingEmitter(on_emit=_visible)
    monkeypatch.setattr(sio, "emit", emitter)
    host_id = _add_host(client)

    created = _check_in(client, host_id)

    assert len(emitter.calls) == 1
    event, data, kwargs = emitter.calls[0]
    assert event == "visit.checked_in"
    assert kwargs == {"namespace": NAMESPACE}
    summary = data["data"]
    assert summary["id"] == created["visit_id"]
    assert summary["full_name"] == "Ana"
    assert summary["company"] == "Acme"
    assert summary["purpose"] == "Meeting"
    assert summary["qr_token"] == created["qr_token"]
    assert summary["status"] == "ACTIVE"
    assert open_transactions == [False]
    assert seen_in_store == [1]


def test_checkout_publishes_visit_and_time(client, emitted):
    host_id = _add_host(client)
    visit_id = _check_in(client, host_id)["visit_id"]
    emitted.clear()

    closed = client.post(f"/visits/{visit_id}/checkout").json()

    assert emitted == [
        (
            "visit.checked_out",
            {"data": {"visit_id": visit_id, "check_out_at": closed["check_out_at"]}},
            {"namespace": NAMESPACE},
        )
    ]


def test_rejected_checkout_publishes_nothing(client, emitted):
    host_id = _add_host(client)
    visit_id = _check_in(client, host_id)["visit_id"]
    client.post(f"/visits/{visit_id}/checkout")
    emitted.clear()

    assert client.post(f"/visits/{visit_id}/checkout").status_code == 409
    assert emitted == []


def test_host_toggle_publishes_host_state(client, emitted):
    host_id = _add_host(client)

    client.post(f"/hosts/{host_id}/disable")
    client.post(f"/hosts/{host_id}/enable")

    assert emitted == [
        ("host.updated", {"data": {"id": host_id, "is_active": False}}, {"namespace": NAMESPACE}),
        ("host.updated", {"data": {"id": host_id, "is_active": True}}, {"namespace": NAMESPACE}),
    ]


def test_emit_failure_does_not_fail_the_request(client, monkeypatch):
    async def _broken_emit(*args, **kwargs):
        raise RuntimeError("socket gone")

    monkeypatch.setattr(sio, "emit", _broken_emit)
    host_id = _add_host(client)

    created = client.post(
        "/checkin",
        json={"full_name": "Ana", "host_id": host_id, "purpose": "Meeting"},
    )
    assert created.status_code == 200

    visit_id = created.json()["visit_id"]
    assert client.post(f"/visits/{visit_id}/checkout").status_code == 200
    assert client.post(f"/hosts/{host_id}/disable").status_code == 200
    assert client.get(f"/visits/verify/{created.json()['qr_token']}").json()["status"] == "CHECKED_OUT"


@pytest.mark.parametrize("event,args", [("connect", ("sid-1", {}, None)), ("dashboard.refresh", ("sid-1", {}))])
def test_dashboard_snapshot_lists_active_visits(client, session_factory, emitted, monkeypatch, event, args):
    monkeypatch.setattr(events, "SessionLocal", session_factory)
    host_id = _add_host(client)
    open_visit = _check_in(client, host_id, "Ana")
    closed_visit = _check_in(client, host_id, "Ben")
    client.post(f"/visits/{closed_visit['visit_id']}/checkout")
    emitted.clear()

    handler = sio.handlers[NAMESPACE][event]
    asyncio.run(handler(*args))

    assert len(emitted) == 1
    name, data, kwargs = emitted[0]
    assert name == "dashboard.snapshot"
    assert kwargs == {"to": "sid-1", "namespace": NAMESPACE}
    assert [row["id"] for row in data["data"]["activeVisits"]] == [open_visit["visit_id"]]
    assert data["data"]["activeVisits"][0]["full_name"] == "Ana"
