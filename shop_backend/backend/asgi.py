# backend/asgi.py
"""
ASGI config for the shop backend.

The notification stream (SSE) holds a connection open per subscriber; serve it
through ASGI (uvicorn/daphne) or a threaded WSGI worker.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.settings.dev")

application = get_asgi_application()
