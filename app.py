"""Development host for game metadata plugins."""

import logging
import os
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv('.env')

# Configure logging BEFORE importing any modules that use logger
log_level = os.getenv('LOG_LEVEL', 'DEBUG')
logging.basicConfig(
    level=getattr(logging, log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Import after logging is configured
from fastapi import FastAPI
from pluginapi.dependencies import get_plugin_manager
from pluginapi.routers import plugins_router

app = FastAPI(
    title="Game Metadata Plugin Host",
    description="Development host for configuring and exercising metadata plugins",
    version="1.0.0"
)

app.include_router(plugins_router)  # /api/plugins endpoints


@app.get("/")
async def root():
    return {"message": "Game Metadata Plugin Host", "docs": "/docs"}


@app.on_event("startup")
async def startup_event():
    """Application startup event."""
    logger.info("Starting plugin host")
    manager = get_plugin_manager()
    for plugin in manager.list_plugins():
        logger.info(f"  - {plugin['id']} {plugin['version']} ({plugin['state']})")


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown event."""
    logger.info("Shutting down plugin host")
    get_plugin_manager().stop_all()


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", "9090"))
    uvicorn.run("app:app", host="0.0.0.0", port=port, reload=True)
