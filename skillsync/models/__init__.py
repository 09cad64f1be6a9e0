"""Data models for units and sync reports."""
