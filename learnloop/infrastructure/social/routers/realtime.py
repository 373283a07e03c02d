"""WebSocket channel for live like updates."""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from learnloop.core import container
from learnloop.feature_flags import get_feature_flag

router = APIRouter(tags=["realtime"])


@router.websocket("/ws")
async def live_updates(websocket: WebSocket) -> None:
    """
    Stream like events to the client.

    Each message is a JSON object with an ``event`` name and the event fields.
    Messages sent by the client are ignored.
    """
    if not get_feature_flag("live_updates"):
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    broadcaster = container.like_broadcaster()
    await broadcaster.connect(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        broadcaster.disconnect(websocket)
