"""
Name: ASGI Entrypoint (task_api.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling
  - Keep the import path used by uvicorn stable (task_api.main:app)

Notes/Constraints:
  - No configuration or IO should live here; keep it thin and predictable
"""

from task_api.api.main import app

__all__ = ["app"]
