"""WebSocket connection management and periodic snapshot broadcasts."""

import asyncio
import json
from dataclasses import dataclass, field
from typing import Callable

from fastapi import WebSocket

from .logging_config import get_logger
from .types import Snapshot

logger = get_logger(__name__, namespace='ws')

UPDATE_MESSAGE_TYPE = 'dashboard_update'


def snapshot_message(snapshot: Snapshot) -> dict:
    """Wrap a snapshot in the push message envelope."""
    return {'type': UPDATE_MESSAGE_TYPE, 'snapshot': snapshot}


@dataclass
class ConnectionManager:
    """Tracks connected viewers and broadcasts dashboard updates.

    The connection list is the process-wide viewer count: connect adds,
    disconnect removes, and the refresh loop only reads it.
    """
    active_connections: list[WebSocket] = field(default_factory=list)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    async def connect(self, websocket: WebSocket):
        """Accept a new WebSocket connection."""
        await websocket.accept()
        async with self._lock:
            self.active_connections.append(websocket)
        logger.info(f"Client connected. Total: {len(self.active_connections)}")

    async def disconnect(self, websocket: WebSocket):
        """Remove a WebSocket connection."""
        async with self._lock:
            if websocket in self.active_connections:
                self.active_connections.remove(websocket)
        logger.info(f"Client disconnected. Total: {len(self.active_connections)}")

    async def broadcast(self, message: dict):
        """Broadcast message to all connected clients."""
        if not self.active_connections:
            return

        data = json.dumps(message)
        disconnected = []

        async with self._lock:
            for connection in self.active_connections:
                try:
                    await connection.send_text(data)
                except Exception:
                    disconnected.append(connection)

        for conn in disconnected:
            await self.disconnect(conn)

    @property
    def connection_count(self) -> int:
        return len(self.active_connections)


async def broadcast_snapshot_once(
    ws_manager: ConnectionManager,
    build_snapshot_func: Callable[[], Snapshot],
) -> bool:
    """Run one refresh tick.

    Returns:
        True if a snapshot was built and broadcast, False when skipped
        because no viewers are connected
    """
    if ws_manager.connection_count == 0:
        return False

    snapshot = build_snapshot_func()
    await ws_manager.broadcast(snapshot_message(snapshot))
    logger.debug(f"Broadcast update to {ws_manager.connection_count} clients")
    return True


async def watch_snapshots_loop(
    ws_manager: ConnectionManager,
    build_snapshot_func: Callable[[], Snapshot],
    interval: float = 5.0,
):
    """Background task that recomputes and broadcasts snapshots.

    A failed tick is logged and the loop carries on with the next one.

    Args:
        ws_manager: WebSocket connection manager
        build_snapshot_func: Function returning a fresh snapshot
        interval: Seconds between ticks
    """
    logger.info(f"Starting snapshot watcher (interval={interval}s)")

    while True:
        try:
            await broadcast_snapshot_once(ws_manager, build_snapshot_func)
            await asyncio.sleep(interval)

        except asyncio.CancelledError:
            logger.info("Snapshot watcher cancelled")
            break
        except Exception as e:
            logger.error(f"Error broadcasting update: {e}")
            await asyncio.sleep(interval)
