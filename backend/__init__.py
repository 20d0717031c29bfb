"""Sonic backend: service cores live under ``backend.core``."""
