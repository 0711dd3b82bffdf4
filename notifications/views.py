# notifications/views.py
import logging
import secrets

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework import status, permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from .jobs import run_job, UnknownJobError, JOB_NAMES
from .models import NotificationPreference, PushSubscription
from .preferences import resolve_preferences
from .serializers import (
    NotificationPreferenceSerializer, SubscribeSerializer, UnsubscribeSerializer, SendNotificationSerializer,
)
from .services import NotificationService

logger = logging.getLogger(__name__)


def _stored_preferences(user):
    return NotificationPreference.objects.filter(user=user).first()


def _preferences_response(user_id, status_code=status.HTTP_200_OK):
    data = resolve_preferences(user_id).as_dict()
    data.pop('user_id')
    return Response(data, status=status_code)


class NotificationPreferencesView(APIView):
    """
    The requesting user's notification switches.
    GET returns stored values or defaults; POST and PUT upsert.
    """
    resource_name = 'Notification preferences'

    def get(self, request):
        return _preferences_response(request.user.pk)

    def post(self, request):
        instance = _stored_preferences(request.user)
        serializer = NotificationPreferenceSerializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        created = instance is None
        try:
            with transaction.atomic():
                serializer.save(user=request.user)
        except IntegrityError:
            if not created:
                raise
            # A concurrent first write inserted the row; apply ours on top of it
            instance = NotificationPreference.objects.get(user=request.user)
            serializer = NotificationPreferenceSerializer(instance, data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            serializer.save()
            created = False
        return _preferences_response(
            request.user.pk, status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )

    put = post


class PushSubscriptionView(APIView):
    """Registers, inspects and removes the requesting user's push endpoints."""
    resource_name = 'Push subscription'

    def get(self, request):
        count = PushSubscription.objects.filter(user=request.user).count()
        return Response({'is_subscribed': count > 0, 'subscription_count': count})

    def post(self, request):
        serializer = SubscribeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        subscription, created = serializer.save(user=request.user)
        logger.info("Push subscription %s for user %s", 'created' if created else 'updated', request.user.pk)
        return Response(
            {'success': True, 'id': subscription.pk},
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    def delete(self, request):
        serializer = UnsubscribeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        deleted, _ = PushSubscription.objects.filter(
            user=request.user, endpoint=serializer.validated_data['endpoint']
        ).delete()
        if not deleted:
            return Response({'error': "Push subscription not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response({'success': True})


class SendNotificationView(APIView):
    """Manual send for staff, mostly to test a device."""
    permission_classes = [permissions.IsAdminUser]

    def post(self, request):
        serializer = SendNotificationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        service = NotificationService()

        if data.get('user_ids'):
            result = service.dispatch_bulk([user.pk for user in data['user_ids']], data['type'], data['data'])
        else:
            result = service.dispatch(data['user_id'].pk, data['type'], data['data'])
        return Response(result)


def _is_cron_request_authorized(request):
    if settings.DEBUG:
        return True
    if request.headers.get(settings.CRON_PLATFORM_HEADER) == 'true':
        return True
    secret = settings.CRON_SECRET
    if not secret:
        return False
    return secrets.compare_digest(request.headers.get('Authorization', ''), f"Bearer {secret}")


class CronView(APIView):
    """
    Entry point for the external scheduler. Authorized by the shared cron
    secret or the hosting platform's cron header, not by user sessions.
    """
    authentication_classes = []
    permission_classes = []

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        self.authorized = _is_cron_request_authorized(request)

    def get(self, request):
        if not self.authorized:
            return Response({'error': "Unauthorized"}, status=status.HTTP_401_UNAUTHORIZED)
        return Response({'status': 'ok', 'jobs': list(JOB_NAMES), 'timestamp': timezone.now().isoformat()})

    def post(self, request):
        if not self.authorized:
            logger.warning("Rejected unauthorized cron request from %s", request.META.get('REMOTE_ADDR'))
            return Response({'error': "Unauthorized"}, status=status.HTTP_401_UNAUTHORIZED)

        job = request.query_params.get('job', 'all')
        try:
            results = run_job(job)
        except UnknownJobError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({'timestamp': timezone.now().isoformat(), 'job': job, **results})
