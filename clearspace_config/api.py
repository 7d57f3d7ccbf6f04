"""FastAPI application for viewing and editing the Clearspace connection settings."""
from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from .manager import ClearspaceManager
from .registry import get_manager

SECRET_MASK = "********"
REQUIRED_FIELDS = ("port", "path", "secure")


class SettingsView(BaseModel):
    host: Optional[str] = None
    port: int
    path: str
    shared_secret: Optional[str] = None
    secure: bool
    connection_uri: str


class SettingsUpdate(BaseModel):
    host: Optional[str] = None
    port: Optional[int] = None
    path: Optional[str] = None
    shared_secret: Optional[str] = None
    secure: Optional[bool] = None


class ConnectionTestResult(BaseModel):
    success: bool


def _view(manager: ClearspaceManager) -> SettingsView:
    snapshot = manager.snapshot()
    return SettingsView(
        host=snapshot.host,
        port=snapshot.port,
        path=snapshot.path,
        shared_secret=SECRET_MASK if snapshot.shared_secret else None,
        secure=snapshot.secure,
        connection_uri=snapshot.connection_uri,
    )


def create_app(manager: Optional[ClearspaceManager] = None) -> FastAPI:
    app = FastAPI(
        title="Clearspace Settings Service",
        description="Admin endpoints for the Clearspace connection settings.",
        version="0.1.0",
    )

    def current_manager() -> ClearspaceManager:
        return manager if manager is not None else get_manager()

    @app.get("/clearspace", response_model=SettingsView, summary="Return the connection settings", tags=["clearspace"])
    async def read_settings():
        return _view(current_manager())

    @app.put("/clearspace", response_model=SettingsView, summary="Update the connection settings", tags=["clearspace"])
    async def update_settings(update: SettingsUpdate):
        target = current_manager()
        # Only fields present in the request body are applied.
        changes = update.model_dump(exclude_unset=True)
        for name in REQUIRED_FIELDS:
            if name in changes and changes[name] is None:
                raise HTTPException(status_code=422, detail=f"{name} cannot be null")
        for name, value in changes.items():
            setattr(target, name, value)
        return _view(target)

    @app.post(
        "/clearspace/test",
        response_model=ConnectionTestResult,
        summary="Run the connection test",
        tags=["clearspace"],
    )
    async def test_connection():
        return ConnectionTestResult(success=current_manager().test_connection())

    @app.get("/health", summary="Service health check", tags=["system"])
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
