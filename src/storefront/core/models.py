"""Core models for Storefront."""

from django.contrib.auth.models import AbstractUser
from django.contrib.auth.models import UserManager as DjangoUserManager
from django.db import models


class UserManager(DjangoUserManager):
    """User manager that keeps the role in step with superuser status."""

    def create_user(self, username, email=None, password=None, **extra_fields):
        """Create and save a customer with the given username and password."""
        extra_fields.setdefault("role", User.Role.CUSTOMER)
        return super().create_user(username, email, password, **extra_fields)

    def create_superuser(self, username, email=None, password=None, **extra_fields):
        """Create and save a superuser; superusers are always store admins."""
        extra_fields.setdefault("role", User.Role.ADMIN)

        if extra_fields.get("role") != User.Role.ADMIN:
            raise ValueError("Superuser must have role='admin'.")

        return super().create_superuser(username, email, password, **extra_fields)


class User(AbstractUser):
    """Store account: a customer or an admin."""

    class Role(models.TextChoices):
        CUSTOMER = "customer", "Customer"
        ADMIN = "admin", "Admin"

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.CUSTOMER,
    )

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"

    def __str__(self):
        return self.username

    @property
    def is_admin(self):
        return self.role == self.Role.ADMIN

    def get_display_name(self):
        """Get display name for the user."""
        if self.first_name or self.last_name:
            return f"{self.first_name} {self.last_name}".strip()
        return self.username
