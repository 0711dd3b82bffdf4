# notifications/jobs.py
"""
Scheduled notification jobs, run from the cron endpoint or the
send_task_notifications management command.

Every job returns counts instead of raising: a failed push for one task
never stops the rest of the run.
"""
import logging
import math
from collections import defaultdict
from datetime import datetime, time, timedelta

from django.conf import settings
from django.db import IntegrityError
from django.utils import timezone

from tasks.models import Task
from .models import NotificationPreference, NotificationReceipt, NotificationType, MAX_REMINDER_HOURS
from .preferences import resolve_many
from .services import NotificationService

logger = logging.getLogger(__name__)


class UnknownJobError(ValueError):
    """Raised by run_job for a job name it does not know."""


# --- de-duplication ledger ---

def _receipt_key(notification_type, object_id, now):
    return f"{str(notification_type)}:{object_id}:{timezone.localdate(now).isoformat()}"


def _already_sent(key):
    if not settings.NOTIFICATIONS_DEDUPLICATE_SCHEDULED:
        return False
    return NotificationReceipt.objects.filter(key=key).exists()


def _record_sent(key, user_id, notification_type):
    if not settings.NOTIFICATIONS_DEDUPLICATE_SCHEDULED:
        return
    try:
        NotificationReceipt.objects.get_or_create(
            key=key, defaults={'user_id': user_id, 'notification_type': notification_type}
        )
    except IntegrityError:
        # Another run recorded the same key between our lookup and insert
        logger.debug("Receipt %s already recorded", key)


def _send_scheduled(service, user_id, notification_type, data, key, counts):
    """Dispatches one scheduled notification and updates `counts` in place."""
    if _already_sent(key):
        logger.debug("Skipping %s, already sent", key)
        return
    result = service.dispatch(user_id, notification_type, data)
    if result['success']:
        counts['sent'] += 1
        _record_sent(key, user_id, notification_type)
    else:
        counts['failed'] += 1


# --- jobs ---

def check_and_send_due_reminders(now=None, service=None):
    """
    Sends a 'task due soon' push for every pending task whose due date falls
    inside its assignee's reminder window, [now, now + reminder_hours_before).
    Users who never saved preferences get the defaults (reminders on, 24h).
    """
    now = now or timezone.now()
    service = service or NotificationService()
    counts = {'checked': 0, 'sent': 0, 'failed': 0}

    # Widest possible window first, then narrowed per user below
    candidates = Task.objects.filter(
        status=Task.Status.PENDING,
        assigned_to__isnull=False,
        due_date__gte=now,
        due_date__lt=now + timedelta(hours=MAX_REMINDER_HOURS),
    ).order_by('due_date', 'pk')

    tasks_by_user = defaultdict(list)
    for task in candidates:
        tasks_by_user[task.assigned_to_id].append(task)

    preferences = resolve_many(tasks_by_user)
    for user_id, tasks in tasks_by_user.items():
        prefs = preferences[user_id]
        if not prefs.task_reminders:
            continue
        window_end = now + timedelta(hours=prefs.reminder_hours_before)
        for task in tasks:
            if task.due_date >= window_end:
                continue
            counts['checked'] += 1
            hours_remaining = math.ceil((task.due_date - now).total_seconds() / 3600)
            _send_scheduled(
                service, user_id, NotificationType.TASK_DUE_SOON,
                {'task_id': task.pk, 'task_title': task.title, 'hours_remaining': hours_remaining},
                key=_receipt_key(NotificationType.TASK_DUE_SOON, task.pk, now),
                counts=counts,
            )

    logger.info("Due reminders: %(checked)s checked, %(sent)s sent, %(failed)s failed", counts)
    return counts


def check_and_send_overdue_notifications(now=None, service=None):
    """Sends a 'task overdue' push to the assignee of every pending task past its due date."""
    now = now or timezone.now()
    service = service or NotificationService()
    counts = {'checked': 0, 'sent': 0, 'failed': 0}

    overdue = Task.objects.filter(status=Task.Status.PENDING, due_date__lt=now).order_by('due_date', 'pk')
    for task in overdue:
        counts['checked'] += 1
        if not task.assigned_to_id:
            continue
        _send_scheduled(
            service, task.assigned_to_id, NotificationType.TASK_OVERDUE,
            {'task_id': task.pk, 'task_title': task.title},
            key=_receipt_key(NotificationType.TASK_OVERDUE, task.pk, now),
            counts=counts,
        )

    logger.info("Overdue notifications: %(checked)s checked, %(sent)s sent, %(failed)s failed", counts)
    return counts


def send_daily_digests(now=None, service=None):
    """
    Sends one summary push per opted-in user with the number of pending
    tasks due today (local time). Users with nothing due get nothing.
    """
    now = now or timezone.now()
    service = service or NotificationService()
    counts = {'checked': 0, 'sent': 0, 'failed': 0}

    today = timezone.localdate(now)
    day_start = timezone.make_aware(datetime.combine(today, time.min))
    day_end = timezone.make_aware(datetime.combine(today + timedelta(days=1), time.min))

    user_ids = NotificationPreference.objects.filter(daily_digest=True).values_list('user_id', flat=True)
    for user_id in user_ids:
        counts['checked'] += 1
        task_count = Task.objects.filter(
            assigned_to_id=user_id,
            status=Task.Status.PENDING,
            due_date__gte=day_start,
            due_date__lt=day_end,
        ).count()
        if not task_count:
            continue
        _send_scheduled(
            service, user_id, NotificationType.DAILY_DIGEST,
            {'task_count': task_count},
            key=_receipt_key(NotificationType.DAILY_DIGEST, user_id, now),
            counts=counts,
        )

    logger.info("Daily digests: %(checked)s checked, %(sent)s sent, %(failed)s failed", counts)
    return counts


# job name -> (result key, function)
JOBS = {
    'due-reminders': ('due_reminders', check_and_send_due_reminders),
    'overdue': ('overdue', check_and_send_overdue_notifications),
    'daily-digest': ('daily_digest', send_daily_digests),
}
JOB_NAMES = tuple(JOBS) + ('all',)


def run_job(name, now=None, service=None):
    """
    Runs one job by name, or all of them in sequence for 'all'.
    Returns {result_key: counts} for every job that ran.
    """
    if name == 'all':
        selected = list(JOBS.values())
    elif name in JOBS:
        selected = [JOBS[name]]
    else:
        raise UnknownJobError(f"Unknown job '{name}'. Expected one of: {', '.join(JOB_NAMES)}")

    service = service or NotificationService()
    return {result_key: job(now=now, service=service) for result_key, job in selected}
