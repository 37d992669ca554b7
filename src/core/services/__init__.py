"""Servicios del Core (conflict pipeline, command handlers)."""
