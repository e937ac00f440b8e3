"""In-memory WebSocket hub that tells clients which stored collections changed."""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Iterable

from fastapi import WebSocket
from starlette.websockets import WebSocketState

logger = logging.getLogger(__name__)


class StorageSocketHub:
    """Anonymous sockets that receive one ``{"type": "storage", "key": ...}`` message per changed key.

    A batch of keys is de-duplicated before sending, so a request that rewrites
    the same collection twice triggers a single reload on the client.
    """

    def __init__(self) -> None:
        self._connections: set[WebSocket] = set()
        self._lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        async with self._lock:
            self._connections.add(websocket)

    async def disconnect(self, websocket: WebSocket) -> None:
        async with self._lock:
            self._connections.discard(websocket)

    async def publish(self, keys: Iterable[str]) -> None:
        messages = [json.dumps({"type": "storage", "key": key}) for key in dict.fromkeys(keys)]
        if not messages:
            return
        async with self._lock:
            targets = list(self._connections)
        for connection in targets:
            if connection.client_state is not WebSocketState.CONNECTED:
                await self.disconnect(connection)
                continue
            try:
                for message in messages:
                    await connection.send_text(message)
            except Exception:
                logger.debug("Dropping storage socket after failed send", exc_info=True)
                await self.disconnect(connection)


storage_updates_manager = StorageSocketHub()


async def broadcast_storage_change(*keys: str) -> None:
    """Tell connected clients which collections changed so they reload them."""

    try:
        await storage_updates_manager.publish(keys)
    except Exception:  # pragma: no cover - best effort logging
        logger.exception("Failed to broadcast storage change keys=%s", keys)


__all__ = ["StorageSocketHub", "broadcast_storage_change", "storage_updates_manager"]
