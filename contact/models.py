"""
Contact Management Models

Inquiries submitted through the public contact form.
"""
from datetime import timedelta
from typing import Dict, List
import uuid

from django.conf import settings
from django.db import models

from core.exceptions import StatusTransitionError


# ==============================================================================
# STATE MACHINE FOR STATUS TRANSITIONS
# ==============================================================================

CONTACT_STATUS_TRANSITIONS = {
    'new': ['read', 'replied'],
    'read': ['replied'],
    'replied': [],  # Terminal state
}


def validate_status_transition(current_status: str, new_status: str,
                               transitions: Dict[str, List[str]] = CONTACT_STATUS_TRANSITIONS) -> bool:
    """
    Validate that a status transition is allowed.

    Raises:
        StatusTransitionError: If the move is not listed in ``transitions``
    """
    if new_status not in transitions.get(current_status, []):
        raise StatusTransitionError(
            f"Invalid contact message status transition: '{current_status}' -> '{new_status}'"
        )
    return True


class ContactMessageQuerySet(models.QuerySet):
    def unreplied(self):
        return self.exclude(status=ContactMessage.Status.REPLIED)

    def recent_from(self, email, now):
        """Messages from ``email`` created within the reply match window."""
        window = timedelta(hours=settings.REPLY_MATCH_WINDOW_HOURS)
        return self.filter(email__iexact=email, created_at__gte=now - window)


class ContactMessage(models.Model):
    """
    A customer inquiry from the public contact form.

    Lifecycle: new -> read -> replied. Replying may skip ``read``.
    """

    class Status(models.TextChoices):
        NEW = 'new', 'New'
        READ = 'read', 'Read'
        REPLIED = 'replied', 'Replied'

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    # Contact Information
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField(max_length=255, db_index=True)
    phone = models.CharField(max_length=50)

    # Inquiry
    device_type = models.CharField(max_length=255, blank=True, default='')
    service_needed = models.CharField(max_length=255, blank=True, default='')
    message = models.TextField()

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.NEW,
        db_index=True,
        help_text="Current status of the message"
    )

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ContactMessageQuerySet.as_manager()

    class Meta:
        db_table = 'contact_messages'
        ordering = ['-created_at']
        verbose_name = 'Contact Message'
        verbose_name_plural = 'Contact Messages'
        indexes = [
            models.Index(fields=['email', 'created_at'], name='contact_msg_email_created_idx'),
        ]

    def __str__(self):
        return f"{self.full_name} <{self.email}> ({self.status})"

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def service_label(self):
        return self.service_needed or self.device_type or 'General Inquiry'

    def transition_to(self, new_status):
        validate_status_transition(self.status, new_status)
        self.status = new_status
        self.save(update_fields=['status', 'updated_at'])

    def mark_read(self):
        """Move ``new`` to ``read``. Already read or replied stays put."""
        if self.status != self.Status.NEW:
            return False
        self.transition_to(self.Status.READ)
        return True
