"""
App assembly entry point.

Re-exports the FastAPI `app` from `vhr.api.main` so the service runs with
`uvicorn app:app`.
"""

from vhr.api.main import app  # noqa: F401
