"""
PATH: users/models/user.py

CUSTOM USER MODEL

Identity:
- email is the login identity (unique, normalised).
- name is a free display name shown on orders and notifications.

Roles:
- admin   : runs the shop (orders, settlement, catalogue, settings)
- manager : read-only dashboards and order lists
- user    : a shopper

Push:
- fcm_token is the device token used for push notifications.
  It is nullable; clearing it disables push for that user.
"""

from __future__ import annotations

import uuid

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models


# ---------------- USER MANAGER ----------------
class UserManager(BaseUserManager):
    def create_user(self, email=None, password=None, **extra_fields):
        """
        create_user(email="a@b.com", password="x", name="Ada", role="user")

        Rules:
        - email is required
        - password may be omitted (unusable password, e.g. seeded staff)
        """
        email = (email or "").strip()
        if not email:
            raise ValueError("Users must have an email address")

        email = self.normalize_email(email)
        extra_fields.setdefault("is_active", True)

        user = self.model(email=email, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.full_clean(exclude=["password"])
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        if not password:
            raise ValueError("Superuser must have a password")

        extra_fields.setdefault("role", User.ROLE_ADMIN)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True")

        return self.create_user(email=email, password=password, **extra_fields)


# ---------------- USER MODEL ----------------
class User(AbstractBaseUser, PermissionsMixin):
    ROLE_ADMIN = "admin"
    ROLE_MANAGER = "manager"
    ROLE_USER = "user"

    ROLE_CHOICES = [
        (ROLE_ADMIN, "Admin"),
        (ROLE_MANAGER, "Manager"),
        (ROLE_USER, "User"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150, blank=True)

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_USER)

    fcm_token = models.CharField(max_length=512, null=True, blank=True)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["role"], name="users_user_role_0b7e2c_idx"),
            models.Index(fields=["created_at"], name="users_user_created_5f1a9d_idx"),
        ]

    def clean(self):
        if self.email:
            self.email = self.__class__.objects.normalize_email(self.email).strip()
        if not self.email:
            raise ValidationError("User must have an email")
        self.name = (self.name or "").strip()

    @property
    def is_admin(self) -> bool:
        return self.role == self.ROLE_ADMIN

    def __str__(self):
        return f"{self.email} ({self.role})"
