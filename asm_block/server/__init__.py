"""HTTP API for rendering fragments (FastAPI)."""
