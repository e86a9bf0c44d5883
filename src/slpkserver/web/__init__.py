"""ASGI wiring for the SLPK server."""
