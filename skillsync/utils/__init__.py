"""Helpers around the core: git integration."""
