"""WebSocket endpoint that emits storage-change notifications."""
from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ..services.realtime import storage_updates_manager

router = APIRouter()
logger = logging.getLogger(__name__)


@router.websocket("/ws/storage")
async def storage_updates(websocket: WebSocket) -> None:
    """Hold a connection open and push ``{"type": "storage", "key": ...}`` after writes."""

    await storage_updates_manager.connect(websocket)
    logger.info("Storage socket connected from %s", websocket.client)
    try:
        while True:
            try:
                raw = await websocket.receive_text()
            except WebSocketDisconnect:
                break

            try:
                payload = json.loads(raw)
            except json.JSONDecodeError:
                payload = {"type": raw}
            if not isinstance(payload, dict):
                continue

            message_type = str(payload.get("type") or "").lower()
            if message_type == "ping":
                await websocket.send_text(json.dumps({"type": "pong"}))
            elif message_type == "hello":
                await websocket.send_text(json.dumps({"type": "ready"}))
    finally:
        await storage_updates_manager.disconnect(websocket)
        logger.info("Storage socket disconnected from %s", websocket.client)


__all__ = ["router"]
