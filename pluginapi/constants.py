"""Global constants for the plugin host."""

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent

BUNDLED_PLUGINS_DIR = PROJECT_ROOT / "plugins" / "bundled"
TEMPLATE_PLUGIN_DIR = BUNDLED_PLUGINS_DIR / "template"

# Upper bound for a single provider lookup (seconds)
METADATA_LOOKUP_TIMEOUT = float(os.getenv("METADATA_LOOKUP_TIMEOUT", "30"))

# Result count used when a title search does not ask for one
DEFAULT_MAX_RESULTS = int(os.getenv("DEFAULT_MAX_RESULTS", "10"))
