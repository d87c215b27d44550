"""HTTP surface (FastAPI app, routers, error mapping)."""
