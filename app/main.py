"""FastAPI ASGI application entrypoint.

Run with ``uvicorn app.main:app``.
"""

from .core.app_factory import create_application

app = create_application()

__all__ = ("app",)
