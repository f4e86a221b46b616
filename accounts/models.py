from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models
import uuid


class SiteUserManager(UserManager):
    """New accounts default to editor; superusers default to admin."""

    def create_user(self, username, email=None, password=None, **extra_fields):
        extra_fields.setdefault('role', User.Role.EDITOR)
        return super().create_user(username, email, password, **extra_fields)

    def create_superuser(self, username, email=None, password=None, **extra_fields):
        extra_fields.setdefault('role', User.Role.ADMIN)
        return super().create_superuser(username, email, password, **extra_fields)


class User(AbstractUser):
    """
    Admin-panel account.

    Passwords are stored only as Django's salted hash. Users are created and
    deleted by admins; there is no self-service registration.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Role(models.TextChoices):
        ADMIN = 'admin', 'Admin'
        EDITOR = 'editor', 'Editor'

    email = models.EmailField(
        unique=True,
        help_text="Email address (unique)"
    )

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.EDITOR,
        db_index=True,
        help_text="Access tier in the admin panel"
    )

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = SiteUserManager()

    REQUIRED_FIELDS = ['email']

    class Meta:
        db_table = 'users'
        ordering = ['-created_at']
        verbose_name = 'User'
        verbose_name_plural = 'Users'

    def __str__(self):
        return f"{self.username} ({self.get_role_display()})"

    @property
    def is_admin(self):
        return self.role == self.Role.ADMIN
