"""
Counter WebSocket

Demo live-update channel: pushes an increasing counter to the client at a
fixed interval until the connection goes away.
"""

import asyncio
import contextlib
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from lineage.config import Timeouts, settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["counter"])


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    # Client frames are ignored; only the disconnect matters
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                return
    except (WebSocketDisconnect, RuntimeError) as e:
        # Receiving on a closed socket counts as a disconnect
        logger.debug(f"Counter receive ended: {e!r}")


@router.websocket("/counter")
async def counter(websocket: WebSocket):
    """Send {"count": n} every COUNTER_INTERVAL_SECONDS, starting at 0."""
    await websocket.accept()
    disconnected = asyncio.create_task(_wait_for_disconnect(websocket))

    count = 0
    try:
        while not disconnected.done():
            try:
                await asyncio.wait_for(
                    websocket.send_json({"count": count}),
                    timeout=Timeouts.WEBSOCKET_SEND,
                )
            except (WebSocketDisconnect, RuntimeError, asyncio.TimeoutError) as e:
                logger.warning(f"Failed to send counter update: {e!r}", extra={"count": count})
                break
            count += 1
            await asyncio.wait({disconnected}, timeout=settings.COUNTER_INTERVAL_SECONDS)
    finally:
        disconnected.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await disconnected

    logger.debug("Counter connection closed", extra={"count": count})
