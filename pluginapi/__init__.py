"""Plugin API for game metadata plugins."""
