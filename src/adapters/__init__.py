"""Adaptadores de I/O: HTTP (httpx) y terminal (typer)."""
