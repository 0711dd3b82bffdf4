# notifications/push.py
import json

import requests
from django.conf import settings
from pywebpush import webpush, WebPushException


# Push services answer 404/410 once a subscription has been revoked or expired
GONE_STATUS_CODES = (404, 410)

DEFAULT_TTL_SECONDS = 60 * 60


class PushDeliveryError(Exception):
    """A push could not be delivered; the subscription may still be valid."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class SubscriptionExpired(PushDeliveryError):
    """The push service reports the subscription is permanently gone."""


class WebPushSender:
    """
    Delivers payloads through the Web Push protocol (VAPID) using pywebpush.
    Safe to call from worker threads: it only does network I/O.
    """

    provider_name = 'VAPID'

    def __init__(self, public_key=None, private_key=None, subject=None, timeout=None):
        self.public_key = public_key
        self.private_key = private_key
        self.subject = subject
        self.timeout = timeout

    @property
    def is_configured(self):
        return bool(self.public_key and self.private_key)

    def send(self, subscription_info, payload, ttl=DEFAULT_TTL_SECONDS, urgency='normal'):
        if not self.is_configured:
            raise PushDeliveryError(f"{self.provider_name} keys not configured")

        data = payload if isinstance(payload, str) else json.dumps(payload)
        try:
            webpush(
                subscription_info=subscription_info,
                data=data,
                vapid_private_key=self.private_key,
                # pywebpush adds aud/exp to the claims dict, so build a fresh one per call
                vapid_claims={'sub': self.subject},
                ttl=ttl,
                headers={'Urgency': urgency},
                timeout=self.timeout,
            )
        except WebPushException as e:
            status_code = getattr(e.response, 'status_code', None)
            if status_code in GONE_STATUS_CODES:
                raise SubscriptionExpired(str(e), status_code=status_code) from e
            raise PushDeliveryError(str(e), status_code=status_code) from e
        except requests.RequestException as e:
            raise PushDeliveryError(str(e)) from e


def get_push_sender():
    """Builds the sender from Django settings."""
    return WebPushSender(
        public_key=settings.VAPID_PUBLIC_KEY,
        private_key=settings.VAPID_PRIVATE_KEY,
        subject=settings.VAPID_SUBJECT,
        timeout=settings.PUSH_TIMEOUT_SECONDS,
    )
