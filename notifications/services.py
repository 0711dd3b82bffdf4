# notifications/services.py
import json
import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor

from django.conf import settings

from .models import PushSubscription, NotificationType
from .payloads import build_payload
from .preferences import resolve_many
from .push import get_push_sender, PushDeliveryError, SubscriptionExpired, DEFAULT_TTL_SECONDS

logger = logging.getLogger(__name__)

NO_SUBSCRIPTIONS = "No push subscriptions found"
ALL_DELIVERIES_FAILED = "Failed to send to all subscriptions"


class NotificationService:
    """
    Sends task notifications to every push endpoint a user registered.

    Preferences are checked first, then the payload is fanned out to all
    endpoints on a bounded thread pool. Endpoints the push service reports
    as gone are deleted. Nothing here raises for delivery problems: callers
    always get a result dict back, so batch jobs can keep going.
    """

    def __init__(self, sender=None, max_workers=None):
        self.sender = sender or get_push_sender()
        self.max_workers = max_workers or settings.PUSH_MAX_CONCURRENCY

    def dispatch(self, user_id, notification_type, data):
        """Returns {'success': bool, 'error': str | None} for one user."""
        detail = self.dispatch_bulk([user_id], notification_type, data)['details'][0]
        return {'success': detail['success'], 'error': detail['error']}

    def dispatch_bulk(self, user_ids, notification_type, data):
        """
        Dispatches the same notification to several users. Each user's
        outcome only depends on that user's preferences and endpoints.
        Returns {'sent': int, 'failed': int, 'details': [...]}.
        """
        user_ids = list(user_ids)
        errors = {}

        if not self.sender.is_configured:
            reason = f"{self.sender.provider_name} keys not configured"
            return self._bulk_result(user_ids, errors=dict.fromkeys(user_ids, reason), successes={})

        try:
            payload = build_payload(notification_type, data)
        except ValueError as e:
            return self._bulk_result(user_ids, errors=dict.fromkeys(user_ids, str(e)), successes={})

        preferences = resolve_many(user_ids)
        eligible = []
        for user_id, prefs in preferences.items():
            reason = prefs.disabled_reason(notification_type)
            if reason:
                logger.debug("Skipping %s for user %s: %s", notification_type, user_id, reason)
                errors[user_id] = reason
            else:
                eligible.append(user_id)

        subscriptions = defaultdict(list)
        for subscription in PushSubscription.objects.filter(user_id__in=eligible):
            subscriptions[subscription.user_id].append(subscription.as_subscription_info())

        deliveries = []
        for user_id in eligible:
            if not subscriptions[user_id]:
                errors[user_id] = NO_SUBSCRIPTIONS
                continue
            deliveries.extend((user_id, info) for info in subscriptions[user_id])

        urgency = 'high' if notification_type == NotificationType.URGENT_TASK_ASSIGNED else 'normal'
        outcomes = self._send_all(deliveries, json.dumps(payload), urgency)

        successes = defaultdict(int)
        for user_id, endpoint, error in outcomes:
            if error is None:
                successes[user_id] += 1
                continue
            if isinstance(error, SubscriptionExpired):
                # A concurrent run may already have removed it; delete() is a no-op then
                PushSubscription.objects.filter(endpoint=endpoint).delete()
                logger.info("Removed expired push subscription for user %s: %s", user_id, endpoint)
            else:
                logger.warning("Push to %s for user %s failed: %s", endpoint, user_id, error)

        for user_id in eligible:
            if user_id not in errors and not successes.get(user_id):
                errors[user_id] = ALL_DELIVERIES_FAILED

        return self._bulk_result(user_ids, errors=errors, successes=successes)

    def notify_task_assigned(self, task):
        """Pushes an assignment alert to the task's assignee."""
        if not task.assigned_to_id:
            return {'success': False, 'error': "Task has no assignee"}
        notification_type = (
            NotificationType.URGENT_TASK_ASSIGNED if task.is_urgent else NotificationType.NEW_TASK_ASSIGNED
        )
        result = self.dispatch(task.assigned_to_id, notification_type, {
            'task_id': task.pk,
            'task_title': task.title,
        })
        if not result['success']:
            logger.info("Assignment notification for task %s not delivered: %s", task.pk, result['error'])
        return result

    # --- internals ---

    def _send_all(self, deliveries, body, urgency):
        """Sends every (user_id, subscription_info) concurrently; returns (user_id, endpoint, error)."""
        if not deliveries:
            return []
        workers = max(1, min(self.max_workers, len(deliveries)))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix='push') as executor:
            return list(executor.map(lambda delivery: self._deliver(delivery, body, urgency), deliveries))

    def _deliver(self, delivery, body, urgency):
        user_id, info = delivery
        endpoint = info['endpoint']
        try:
            self.sender.send(info, body, ttl=DEFAULT_TTL_SECONDS, urgency=urgency)
        except PushDeliveryError as e:
            return user_id, endpoint, e
        except Exception as e:
            # Any sender bug is contained to this one endpoint
            logger.exception("Unexpected error pushing to %s", endpoint)
            return user_id, endpoint, e
        return user_id, endpoint, None

    @staticmethod
    def _bulk_result(user_ids, errors, successes):
        details = []
        for user_id in user_ids:
            ok = bool(successes.get(user_id))
            details.append({'user_id': user_id, 'success': ok, 'error': None if ok else errors.get(user_id)})
        sent = sum(1 for d in details if d['success'])
        return {'sent': sent, 'failed': len(details) - sent, 'details': details}
