# analytics/views.py
import logging

from django.apps import apps
from django.conf import settings
from django.utils import timezone
from rest_framework import serializers, status, permissions
from rest_framework.response import Response
from rest_framework.views import APIView

logger = logging.getLogger(__name__)


class EventSerializer(serializers.Serializer):
    namespace = serializers.CharField(max_length=100, default='fructosahel')
    event_type = serializers.CharField(max_length=100)
    page = serializers.CharField(max_length=500, required=False, allow_blank=True)
    properties = serializers.DictField(required=False, default=dict)


class TrackEventView(APIView):
    """
    Accepts a single event or {"events": [...]} from the dashboard and
    buffers them. The queue is flushed once a full batch is pending.
    """
    permission_classes = [permissions.AllowAny]
    queue = None

    def get_queue(self):
        if self.queue is not None:
            return self.queue
        return apps.get_app_config('analytics').event_queue

    def post(self, request):
        many = isinstance(request.data, dict) and 'events' in request.data
        serializer = EventSerializer(data=request.data['events'] if many else request.data, many=many)
        serializer.is_valid(raise_exception=True)
        events = serializer.validated_data if many else [serializer.validated_data]

        if not settings.ANALYTICS_ENABLED:
            return Response({'accepted': len(events), 'queued': 0}, status=status.HTTP_202_ACCEPTED)

        queue = self.get_queue()
        user_id = request.user.pk if request.user.is_authenticated else None
        queued = 0
        for event in events:
            enriched = {**event, 'timestamp': timezone.now().isoformat(), 'user_id': user_id}
            if queue.put(enriched):
                queued += 1
            if queue.batch_ready:
                delivered = queue.flush()
                logger.debug("Flushed %s analytics events", delivered)

        return Response({'accepted': len(events), 'queued': queued}, status=status.HTTP_202_ACCEPTED)
