"""
Name: Backend ASGI Entrypoint (freshora.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling
  - Keep the import path stable: uvicorn freshora.main:app

Notes/Constraints:
  - No configuration or IO should live here; keep it thin and predictable
"""

from freshora.api.main import app

__all__ = ["app"]
