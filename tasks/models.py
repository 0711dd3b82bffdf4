# tasks/models.py
from django.db import models
from django.conf import settings
from django.utils import timezone

from .utils import classify_due_state, DEFAULT_LOOKAHEAD_HOURS


class Task(models.Model):
    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        IN_PROGRESS = 'in_progress', 'In progress'
        COMPLETED = 'completed', 'Completed'
        CANCELLED = 'cancelled', 'Cancelled'

    class Priority(models.TextChoices):
        LOW = 'low', 'Low'
        MEDIUM = 'medium', 'Medium'
        HIGH = 'high', 'High'
        URGENT = 'urgent', 'Urgent'

    # Sort rank for priority, highest first in listings
    PRIORITY_RANK = {'low': 0, 'medium': 1, 'high': 2, 'urgent': 3}

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    farm = models.ForeignKey('farms.Farm', on_delete=models.SET_NULL, null=True, blank=True, related_name='tasks')
    crop = models.ForeignKey('farms.Crop', on_delete=models.SET_NULL, null=True, blank=True, related_name='tasks')
    assigned_to = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='assigned_tasks'
    )
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='created_tasks')
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    priority = models.CharField(max_length=10, choices=Priority.choices, default=Priority.MEDIUM)
    due_date = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['status', 'due_date']
        indexes = [
            models.Index(fields=['assigned_to', 'status', 'due_date'], name='task_assignee_status_due_idx'),
            models.Index(fields=['status', 'due_date'], name='task_status_due_idx'),
        ]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        # completed_at follows status
        if self.status == self.Status.COMPLETED:
            if self.completed_at is None:
                self.completed_at = timezone.now()
        else:
            self.completed_at = None
        super().save(*args, **kwargs)

    @property
    def is_urgent(self):
        return self.priority == self.Priority.URGENT

    def due_state(self, now=None, lookahead_hours=DEFAULT_LOOKAHEAD_HOURS):
        return classify_due_state(self.due_date, self.status, now or timezone.now(), lookahead_hours)
