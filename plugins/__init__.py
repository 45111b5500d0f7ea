"""Plugins shipped with the host."""
