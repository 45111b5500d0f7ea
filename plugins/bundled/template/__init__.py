"""Template game metadata plugin."""
