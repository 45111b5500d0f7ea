"""Plugin manifest model - describes a plugin's identity and entry point."""

import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

MANIFEST_FILE = "plugin.json"


class PluginManifest(BaseModel):
    """Plugin manifest loaded from plugin.json."""

    id: str = Field(..., pattern=r"^[a-z0-9][a-z0-9-]*$", description="Unique plugin identifier (kebab-case)")
    name: str = Field(..., description="Human-readable plugin name")
    version: str = Field(default="1.0.0", description="Plugin version")
    description: str = Field(default="", description="Plugin description")
    provider: str = Field(default="", description="Author or organization")
    license: Optional[str] = Field(default=None, description="SPDX license identifier")
    entry_point: str = Field(
        ...,
        pattern=r"^[A-Za-z_][A-Za-z0-9_.]*:[A-Za-z_][A-Za-z0-9_]*$",
        description="Python module:class path relative to the plugin directory, e.g. 'plugin:PluginTemplate'",
    )
    capabilities: List[str] = Field(
        default_factory=list,
        description="Extension capabilities the plugin provides, e.g. 'metadata'",
    )


def load_manifest(plugin_dir: Path) -> Optional[PluginManifest]:
    """Load and validate a plugin's manifest.

    Args:
        plugin_dir: Plugin directory containing plugin.json

    Returns:
        PluginManifest if valid, None otherwise
    """
    manifest_file = plugin_dir / MANIFEST_FILE
    if not manifest_file.exists():
        logger.error(f"No {MANIFEST_FILE} found at {plugin_dir}")
        return None

    try:
        with open(manifest_file, "r", encoding="utf-8") as f:
            data = json.load(f)
        manifest = PluginManifest(**data)
        logger.debug(f"Loaded manifest: {manifest.id} {manifest.version}")
        return manifest

    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {manifest_file}: {e}")
    except ValidationError as e:
        logger.error(f"Invalid manifest in {manifest_file}: {e}")
    except (OSError, TypeError) as e:
        logger.error(f"Error loading {manifest_file}: {e}")

    return None
