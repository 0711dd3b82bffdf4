# notifications/tests/fakes.py
import json
import threading

from notifications.push import PushDeliveryError, SubscriptionExpired


class FakePushSender:
    """
    In-memory stand-in for WebPushSender. Records every send; endpoints can
    be marked as expired (410) or failing (500). Thread-safe, since the
    dispatcher calls it from a pool.
    """

    provider_name = 'VAPID'

    def __init__(self, configured=True, expired=(), failing=()):
        self.configured = configured
        self.expired = set(expired)
        self.failing = set(failing)
        self.calls = []
        self._lock = threading.Lock()

    @property
    def is_configured(self):
        return self.configured

    def send(self, subscription_info, payload, ttl=None, urgency='normal'):
        endpoint = subscription_info['endpoint']
        with self._lock:
            self.calls.append({
                'endpoint': endpoint,
                'payload': json.loads(payload),
                'ttl': ttl,
                'urgency': urgency,
            })
        if endpoint in self.expired:
            raise SubscriptionExpired("Gone", status_code=410)
        if endpoint in self.failing:
            raise PushDeliveryError("Server error", status_code=500)

    @property
    def endpoints(self):
        return [call['endpoint'] for call in self.calls]

    def payloads_of_type(self, notification_type):
        return [call['payload'] for call in self.calls if call['payload']['type'] == notification_type]
