"""Plugin REST API endpoints - configuration and metadata surfaces."""

import logging
from typing import Dict, Optional

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from pluginapi.constants import DEFAULT_MAX_RESULTS
from pluginapi.dependencies import get_plugin_manager
from pluginapi.plugins.registry import PluginState

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/plugins", tags=["plugins"])


class PluginConfigUpdate(BaseModel):
    """Request body carrying submitted configuration values."""

    config: Dict[str, Optional[str]]


def _not_found(plugin_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Plugin '{plugin_id}' not found")


@router.get("/")
async def list_plugins():
    """List all registered plugins and their status."""
    manager = get_plugin_manager()
    return {"plugins": manager.list_plugins()}


@router.get("/{plugin_id}")
async def get_plugin(plugin_id: str):
    """Get detailed information about a specific plugin."""
    manager = get_plugin_manager()
    info = manager.get_plugin_info(plugin_id)
    if not info:
        raise _not_found(plugin_id)
    return info


@router.get("/{plugin_id}/config/schema")
async def get_config_schema(plugin_id: str):
    """Get the configuration fields a plugin declares."""
    manager = get_plugin_manager()
    schema = manager.get_config_schema(plugin_id)
    if schema is None:
        raise _not_found(plugin_id)
    return {"fields": schema}


@router.post("/{plugin_id}/config/validate")
async def validate_config(plugin_id: str, body: PluginConfigUpdate):
    """Validate configuration values without applying them."""
    manager = get_plugin_manager()
    result = manager.validate_plugin_config(plugin_id, body.config)
    if result is None:
        raise _not_found(plugin_id)
    return result.to_dict()


@router.put("/{plugin_id}/config")
async def update_plugin_config(plugin_id: str, body: PluginConfigUpdate):
    """Validate and apply configuration values."""
    manager = get_plugin_manager()
    result = manager.update_plugin_config(plugin_id, body.config)
    if result is None:
        raise _not_found(plugin_id)
    if not result.is_valid():
        return JSONResponse(status_code=422, content=result.to_dict())
    return {"message": f"Configuration updated for plugin '{plugin_id}'", **result.to_dict()}


@router.post("/{plugin_id}/enable")
async def enable_plugin(plugin_id: str):
    """Start a plugin. Fails with 409 while its configuration is not valid."""
    manager = get_plugin_manager()
    instance = manager.enable_plugin(plugin_id)
    if not instance:
        raise _not_found(plugin_id)
    if instance.state != PluginState.STARTED:
        raise HTTPException(
            status_code=409,
            detail=f"Plugin '{plugin_id}' could not be started (state: {instance.state.value})",
        )
    return {"message": f"Plugin '{plugin_id}' enabled", "plugin": instance.to_dict()}


@router.post("/{plugin_id}/disable")
async def disable_plugin(plugin_id: str):
    """Stop a plugin."""
    manager = get_plugin_manager()
    instance = manager.disable_plugin(plugin_id)
    if not instance:
        raise _not_found(plugin_id)
    return {"message": f"Plugin '{plugin_id}' disabled", "plugin": instance.to_dict()}


@router.delete("/{plugin_id}")
async def uninstall_plugin(plugin_id: str):
    """Stop a plugin, run its delete hook and unregister it."""
    manager = get_plugin_manager()
    instance = manager.uninstall_plugin(plugin_id)
    if not instance:
        raise _not_found(plugin_id)
    return {"message": f"Plugin '{plugin_id}' uninstalled"}


def _require_started(plugin_id: str) -> None:
    manager = get_plugin_manager()
    instance = manager.registry.get(plugin_id)
    if not instance:
        raise _not_found(plugin_id)
    if instance.state != PluginState.STARTED:
        raise HTTPException(status_code=409, detail=f"Plugin '{plugin_id}' is not started")


@router.get("/{plugin_id}/metadata")
async def fetch_by_title(
    plugin_id: str,
    title: str = Query(..., description="Game title, usually a file or folder name"),
    max_results: int = Query(DEFAULT_MAX_RESULTS, ge=0, description="Maximum number of results"),
):
    """Search a plugin's data source by title, best match first."""
    _require_started(plugin_id)
    manager = get_plugin_manager()
    results = await manager.fetch_by_title(plugin_id, title, max_results)
    logger.info(f"Plugin '{plugin_id}' returned {len(results)} result(s) for '{title}'")
    return {"results": [r.to_dict() for r in results]}


@router.get("/{plugin_id}/metadata/{game_id}")
async def fetch_by_id(plugin_id: str, game_id: str):
    """Look up one game by its id in the plugin's data source."""
    _require_started(plugin_id)
    manager = get_plugin_manager()
    result = await manager.fetch_by_id(plugin_id, game_id)
    if result is None:
        raise HTTPException(status_code=404, detail=f"Game '{game_id}' not found by plugin '{plugin_id}'")
    return result.to_dict()
