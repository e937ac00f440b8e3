"""Storage-change notifications over the WebSocket endpoint."""
from __future__ import annotations

import asyncio
import json

from starlette.websockets import WebSocketState

from prylics.services.realtime import StorageSocketHub


def test_socket_answers_ping_and_hello(client):
    with client.websocket_connect("/ws/storage") as websocket:
        websocket.send_text("ping")
        assert websocket.receive_json() == {"type": "pong"}

        websocket.send_json({"type": "hello"})
        assert websocket.receive_json() == {"type": "ready"}


def test_writes_are_broadcast_per_key(client, sign_in):
    headers = sign_in("ada")

    with client.websocket_connect("/ws/storage") as websocket:
        websocket.send_json({"type": "hello"})
        assert websocket.receive_json() == {"type": "ready"}

        response = client.post(
            "/circles",
            json={"name": "Optics", "description": "Light, lenses and lasers"},
            headers=headers,
        )
        assert response.status_code == 201

        keys = [websocket.receive_json()["key"] for _ in range(3)]

    assert keys == ["circles", "circleMemberships", "circleChats"]


def test_health_endpoints(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/api").json()["service"] == "Prylics"


class FakeSocket:
    def __init__(self, state: WebSocketState = WebSocketState.CONNECTED, fail: bool = False) -> None:
        self.client_state = state
        self.fail = fail
        self.sent: list[dict] = []

    async def accept(self) -> None:
        return None

    async def send_text(self, text: str) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(json.loads(text))


def test_publish_deduplicates_keys_and_drops_dead_sockets():
    hub = StorageSocketHub()
    live, closed, broken = FakeSocket(), FakeSocket(WebSocketState.DISCONNECTED), FakeSocket(fail=True)

    async def _run() -> None:
        for socket in (live, closed, broken):
            await hub.connect(socket)
        await hub.publish(["circles", "circleChats", "circles"])
        await hub.publish(["projects"])

    asyncio.run(_run())

    assert [message["key"] for message in live.sent] == ["circles", "circleChats", "projects"]
    assert closed.sent == []
    assert broken.sent == []
    assert hub._connections == {live}
