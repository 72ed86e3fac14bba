# users/management/commands/ensure_superuser.py

"""
Production-safe admin bootstrap.

- Reads AUTO_ADMIN_EMAIL + AUTO_ADMIN_PASSWORD (+ optional AUTO_ADMIN_NAME) from env.
- Idempotent: creates the shop admin if missing; otherwise re-asserts the
  admin role and resets the password.
- Never prints the password.
"""

from __future__ import annotations

import environ
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

env = environ.Env()


class Command(BaseCommand):
    help = "Create/update the shop admin from env vars (idempotent)."

    def handle(self, *args, **options):
        email = env.str("AUTO_ADMIN_EMAIL", default="").strip()
        password = env.str("AUTO_ADMIN_PASSWORD", default="").strip()
        name = env.str("AUTO_ADMIN_NAME", default="Shop Admin").strip()

        if not email or not password:
            self.stdout.write(self.style.WARNING("AUTO_ADMIN_* env vars not set. Skipping."))
            return

        User = get_user_model()
        email = User.objects.normalize_email(email)

        with transaction.atomic():
            user = User.objects.filter(email__iexact=email).first()

            if user:
                user.role = User.ROLE_ADMIN
                user.is_active = True
                user.is_staff = True
                user.is_superuser = True
                user.set_password(password)
                user.save()
                self.stdout.write(self.style.SUCCESS(f"Admin ensured: {email} (updated)"))
                return

            User.objects.create_superuser(email=email, password=password, name=name)
            self.stdout.write(self.style.SUCCESS(f"Admin ensured: {email} (created)"))
