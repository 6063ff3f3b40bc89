"""FastAPI entry point - thin layer over the facility core."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, StrictBool, StrictInt, StrictStr

from core import (
    ConfigurationError,
    FacilitySnapshot,
    RoomFilter,
    RoomView,
    SettingsView,
    UnknownDeviceError,
    UnknownRoomError,
    settings_view,
)
from data import ROOM_REGISTRY
from simulation import TickOrchestrator, Ticker

logging.basicConfig(level=logging.WARNING, format="%(name)s | %(message)s")
logging.getLogger("simulation.orchestrator").setLevel(logging.INFO)
logging.getLogger("simulation.ticker").setLevel(logging.INFO)
logging.getLogger("core.automation").setLevel(logging.INFO)

logger = logging.getLogger(__name__)

# --- module-level state, initialised at import time ---
orchestrator = TickOrchestrator(ROOM_REGISTRY)
ticker = Ticker(orchestrator)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    ticker.start()
    try:
        yield
    finally:
        await ticker.stop()


app = FastAPI(title="Campus Energy Monitor API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class AutomationUpdate(BaseModel):
    """Partial settings change; omitted fields are left as they are."""

    lights_off_time: StrictStr | None = None
    occupancy_control: StrictBool | None = None
    target_temp_c: StrictInt | None = None
    tolerance_c: StrictInt | None = None


@app.get("/snapshot")
def get_snapshot(status_filter: RoomFilter = RoomFilter.ALL) -> FacilitySnapshot:
    return orchestrator.snapshot(status_filter)


@app.get("/rooms/{room_id}")
def get_room(room_id: str) -> RoomView:
    try:
        return orchestrator.room(room_id)
    except UnknownRoomError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@app.post("/rooms/{room_id}/devices/{device}/toggle")
def toggle_device(room_id: str, device: str) -> RoomView:
    try:
        return orchestrator.toggle_device(room_id, device)
    except (UnknownRoomError, UnknownDeviceError) as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@app.get("/automation")
def get_automation() -> SettingsView:
    return settings_view(orchestrator.settings)


@app.patch("/automation")
def update_automation(update: AutomationUpdate) -> SettingsView:
    settings = orchestrator.settings
    try:
        settings.update(**update.model_dump(exclude_none=True))
    except ConfigurationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return settings_view(settings)


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    await websocket.accept()
    try:
        await websocket.send_json(jsonable_encoder(orchestrator.snapshot()))
        while True:
            snapshot = await ticker.wait_for_tick()
            await websocket.send_json(jsonable_encoder(snapshot))
    except WebSocketDisconnect:
        logger.debug("Dashboard client disconnected")
