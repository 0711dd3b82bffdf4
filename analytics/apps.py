from django.apps import AppConfig
from django.conf import settings


class AnalyticsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'analytics'
    verbose_name = "Analytics"

    event_queue = None

    def ready(self):
        from .queue import EventQueue, HttpTransport

        # One queue per process, shared by every request thread
        self.event_queue = EventQueue(
            transport=HttpTransport(settings.ANALYTICS_ENDPOINT, settings.ANALYTICS_API_KEY),
            max_pending=settings.ANALYTICS_MAX_PENDING,
            batch_size=settings.ANALYTICS_BATCH_SIZE,
            policy=settings.ANALYTICS_OVERFLOW_POLICY,
            block_timeout=settings.ANALYTICS_BLOCK_TIMEOUT,
        )
