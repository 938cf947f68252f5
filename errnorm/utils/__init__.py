"""Shared utility helpers (logging support)."""
