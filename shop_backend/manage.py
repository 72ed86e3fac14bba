"""
PATH: manage.py

Django management entrypoint.

Key safeguard:
- If DJANGO_SETTINGS_MODULE is unset OR points at the settings *package*
  ("backend.settings"), force the concrete dev module ("backend.settings.dev").
  The package __init__ loads nothing, so INSTALLED_APPS would be empty.

Bootstrap hook:
- If BOOTSTRAP_ADMIN=True, an admin account is created from
  BOOTSTRAP_ADMIN_EMAIL / BOOTSTRAP_ADMIN_PASSWORD before the command runs.
  Idempotent: an existing account with that email is left alone.
"""

from __future__ import annotations

import os
import sys


def _ensure_settings_module() -> None:
    current = (os.environ.get("DJANGO_SETTINGS_MODULE") or "").strip()

    if not current or current == "backend.settings":
        os.environ["DJANGO_SETTINGS_MODULE"] = "backend.settings.dev"


def _bootstrap_admin_if_requested() -> None:
    if os.environ.get("BOOTSTRAP_ADMIN") != "True":
        return

    email = (os.environ.get("BOOTSTRAP_ADMIN_EMAIL") or "").strip()
    password = os.environ.get("BOOTSTRAP_ADMIN_PASSWORD") or ""
    if not email or not password:
        print("BOOTSTRAP_ADMIN set but email/password missing; skipping.")
        return

    import django

    django.setup()

    from django.contrib.auth import get_user_model

    User = get_user_model()

    if User.objects.filter(email__iexact=email).exists():
        print("Admin already exists.")
        return

    User.objects.create_superuser(email=email, password=password)
    print("Admin created.")


def main() -> None:
    _ensure_settings_module()

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc

    _bootstrap_admin_if_requested()

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
