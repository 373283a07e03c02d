"""In-process fan-out of like events to connected WebSocket clients."""

from typing import Any

import structlog
from fastapi import WebSocket

logger = structlog.get_logger(__name__)


class LikeEventBroadcaster:
    """
    Tracks open WebSocket connections and pushes JSON events to all of them.

    Delivery is best effort: a client that fails to receive is dropped and
    never affects the request that produced the event. Connections are only
    touched from the event loop, so the set needs no lock.
    """

    def __init__(self) -> None:
        self._connections: set[WebSocket] = set()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections.add(websocket)
        logger.debug("websocket_connected", connections=self.connection_count)

    def disconnect(self, websocket: WebSocket) -> None:
        self._connections.discard(websocket)
        logger.debug("websocket_disconnected", connections=self.connection_count)

    async def broadcast(self, event: str, payload: dict[str, Any]) -> None:
        message = {"event": event, **payload}
        for websocket in list(self._connections):
            try:
                await websocket.send_json(message)
            except Exception as e:  # noqa: BLE001
                logger.info("websocket_send_failed", error=str(e))
                self.disconnect(websocket)
