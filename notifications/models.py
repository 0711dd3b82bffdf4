# notifications/models.py
from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator

# reminder_hours_before bounds: one hour to one week
MIN_REMINDER_HOURS = 1
MAX_REMINDER_HOURS = 168


class NotificationType(models.TextChoices):
    TASK_DUE_SOON = 'task_due_soon', 'Task due soon'
    TASK_OVERDUE = 'task_overdue', 'Task overdue'
    URGENT_TASK_ASSIGNED = 'urgent_task_assigned', 'Urgent task assigned'
    NEW_TASK_ASSIGNED = 'new_task_assigned', 'New task assigned'
    DAILY_DIGEST = 'daily_digest', 'Daily digest'


class NotificationPreference(models.Model):
    """
    Per-user push notification switches. Rows are created on first write;
    users without a row get the defaults declared on these fields.
    """
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='notification_preferences'
    )
    enabled = models.BooleanField(default=True, help_text="Master switch for all push notifications.")
    task_reminders = models.BooleanField(default=True, help_text="Reminders before a task is due.")
    urgent_alerts = models.BooleanField(default=True, help_text="Alerts when an urgent task is assigned.")
    daily_digest = models.BooleanField(default=False, help_text="One summary of the tasks due today.")
    new_task_assigned = models.BooleanField(default=True, help_text="Alerts when a task is assigned.")
    task_overdue = models.BooleanField(default=True, help_text="Alerts when an assigned task becomes overdue.")
    reminder_hours_before = models.PositiveSmallIntegerField(
        default=24,
        validators=[MinValueValidator(MIN_REMINDER_HOURS), MaxValueValidator(MAX_REMINDER_HOURS)],
        help_text="How many hours before the due date reminders are sent (1-168).",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Notification Preference"
        verbose_name_plural = "Notification Preferences"

    def __str__(self):
        return f"Notification preferences for {self.user}"


class PushSubscription(models.Model):
    """One registered browser/device endpoint. A user may have several."""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='push_subscriptions')
    endpoint = models.TextField(unique=True)
    p256dh = models.CharField(max_length=255, help_text="Client public key for payload encryption.")
    auth = models.CharField(max_length=255, help_text="Client auth secret for payload encryption.")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Push Subscription"
        verbose_name_plural = "Push Subscriptions"
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.user} - {self.endpoint[:60]}"

    def as_subscription_info(self):
        return {
            'endpoint': self.endpoint,
            'keys': {'p256dh': self.p256dh, 'auth': self.auth},
        }


class NotificationReceipt(models.Model):
    """
    Idempotency ledger for scheduled notifications, keyed by
    '<type>:<task or user id>:<local date>'. Only written when
    NOTIFICATIONS_DEDUPLICATE_SCHEDULED is enabled.
    """
    key = models.CharField(max_length=191, unique=True)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='notification_receipts')
    notification_type = models.CharField(max_length=30, choices=NotificationType.choices)
    sent_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-sent_at']

    def __str__(self):
        return self.key
