import asyncio
import json
from pathlib import Path

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from .aggregation.snapshot import build_snapshot
from .config import FRONTEND_DIR, REFRESH_INTERVAL_SECONDS
from .logging_config import get_logger
from .routes import dashboard_router, log_level_router, skills_router
from .websocket import ConnectionManager, snapshot_message, watch_snapshots_loop

logger = get_logger(__name__, namespace='ws')

app = FastAPI(title="Agent Dashboard")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(dashboard_router)
app.include_router(skills_router)
app.include_router(log_level_router)

# Global connection manager instance
ws_manager = ConnectionManager()

# Snapshot watcher state
_watcher_task: asyncio.Task | None = None


async def send_snapshot(websocket: WebSocket):
    """Send a fresh snapshot to a single viewer."""
    try:
        snapshot = build_snapshot()
    except Exception as e:
        logger.error(f"Error sending initial data: {e}")
        return
    await websocket.send_json(snapshot_message(snapshot))


# WebSocket endpoint for live dashboard updates
@app.websocket("/ws/dashboard")
async def websocket_dashboard(websocket: WebSocket):
    """WebSocket endpoint for live dashboard updates.

    Clients receive:
    - A snapshot immediately on connect
    - dashboard_update messages on every refresh tick

    Message format:
    {
        "type": "dashboard_update",
        "snapshot": {...}
    }
    """
    await ws_manager.connect(websocket)

    try:
        await send_snapshot(websocket)

        while True:
            try:
                data = await websocket.receive_text()
                msg = json.loads(data)

                if not isinstance(msg, dict):
                    continue

                if msg.get('type') == 'ping':
                    await websocket.send_json({'type': 'pong'})

                elif msg.get('type') == 'refresh':
                    await send_snapshot(websocket)

            except json.JSONDecodeError:
                pass  # Ignore malformed messages

    except WebSocketDisconnect:
        pass
    finally:
        await ws_manager.disconnect(websocket)


@app.get("/api/ws/status")
def get_ws_status():
    """Get WebSocket connection status."""
    return {
        'connected_clients': ws_manager.connection_count,
        'watcher_running': _watcher_task is not None and not _watcher_task.done()
    }


@app.on_event("startup")
async def startup_event():
    """Start the snapshot watcher on app startup."""
    global _watcher_task
    _watcher_task = asyncio.create_task(
        watch_snapshots_loop(ws_manager, build_snapshot, interval=REFRESH_INTERVAL_SECONDS)
    )


@app.on_event("shutdown")
async def shutdown_event():
    """Cancel the snapshot watcher on shutdown."""
    global _watcher_task
    if _watcher_task:
        _watcher_task.cancel()
        _watcher_task = None


def _frontend_file(filename: str) -> Path | None:
    frontend_root = FRONTEND_DIR.resolve()
    file_path = (frontend_root / filename).resolve()
    if frontend_root in file_path.parents and file_path.is_file():
        return file_path
    index = frontend_root / "index.html"
    return index if index.is_file() else None


@app.get("/")
def serve_index():
    index = _frontend_file("index.html")
    if index is None:
        raise HTTPException(404, "Frontend not installed")
    return FileResponse(index)


@app.get("/{filename:path}")
def serve_static(filename: str):
    file_path = _frontend_file(filename)
    if file_path is None:
        raise HTTPException(404, "Frontend not installed")
    return FileResponse(file_path)
