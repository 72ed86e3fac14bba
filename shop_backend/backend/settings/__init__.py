# backend/settings/__init__.py
"""
PATH: backend/settings/__init__.py

Settings package entrypoint.

Nothing is imported here. Select a concrete module with DJANGO_SETTINGS_MODULE:
- backend.settings.dev   (local development)
- backend.settings.test  (test runs: manage.py test / pytest)
- backend.settings.prod  (production)
"""
