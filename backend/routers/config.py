"""Configuration API endpoints"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from services.config_manager import ConfigManager

router = APIRouter()


class ConfigUpdateRequest(BaseModel):
    """Request to update configuration"""

    diffOptions: dict | None = None
    export: dict | None = None
    logLevel: str | None = None


class ConfigResponse(BaseModel):
    """Configuration response"""

    diffOptions: dict
    export: dict
    logLevel: str


@router.get("", response_model=ConfigResponse)
async def get_config() -> ConfigResponse:
    """Get current configuration"""
    config = ConfigManager.get_instance().get_config()

    return ConfigResponse(
        diffOptions=config.get("diffOptions", {}),
        export=config.get("export", {}),
        logLevel=config.get("logLevel", "INFO"),
    )


@router.put("")
async def update_config(request: ConfigUpdateRequest) -> dict[str, Any]:
    """Update configuration"""
    config_manager = ConfigManager.get_instance()
    current_config = config_manager.get_config()

    # Update only provided fields
    if request.diffOptions is not None:
        current_config["diffOptions"] = {**current_config.get("diffOptions", {}), **request.diffOptions}
    if request.export is not None:
        current_config["export"] = {**current_config.get("export", {}), **request.export}
    if request.logLevel:
        level = request.logLevel.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise HTTPException(status_code=400, detail=f"Unknown log level: {request.logLevel}")
        current_config["logLevel"] = level

    config_manager.save_config(current_config)
    logging.getLogger().setLevel(current_config["logLevel"])

    return {"status": "success", "message": "Configuration updated"}
