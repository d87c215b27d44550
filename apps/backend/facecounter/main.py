"""
Name: Backend ASGI Entrypoint (facecounter.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling
  - Keep the import path used by uvicorn and tests stable

Notes/Constraints:
  - No configuration or IO should live here
  - Serve with: uvicorn facecounter.main:app
"""

from facecounter.api.main import app

__all__ = ["app"]
