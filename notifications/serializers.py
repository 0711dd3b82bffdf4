# notifications/serializers.py
from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import NotificationPreference, PushSubscription, NotificationType

User = get_user_model()


class NotificationPreferenceSerializer(serializers.ModelSerializer):
    """Partial updates only touch the supplied fields; model validators bound reminder_hours_before."""

    class Meta:
        model = NotificationPreference
        fields = [
            'enabled', 'task_reminders', 'urgent_alerts', 'daily_digest',
            'new_task_assigned', 'task_overdue', 'reminder_hours_before',
        ]


class SubscriptionKeysSerializer(serializers.Serializer):
    p256dh = serializers.CharField(max_length=255)
    auth = serializers.CharField(max_length=255)


class SubscriptionInfoSerializer(serializers.Serializer):
    endpoint = serializers.URLField(max_length=2048)
    keys = SubscriptionKeysSerializer()


class SubscribeSerializer(serializers.Serializer):
    """Body of POST /subscribe/: the browser's PushSubscription.toJSON()."""
    subscription = SubscriptionInfoSerializer()

    def save(self, user):
        info = self.validated_data['subscription']
        # Upsert by endpoint; a browser handed to another account moves with it
        subscription, created = PushSubscription.objects.update_or_create(
            endpoint=info['endpoint'],
            defaults={
                'user': user,
                'p256dh': info['keys']['p256dh'],
                'auth': info['keys']['auth'],
            },
        )
        return subscription, created


class UnsubscribeSerializer(serializers.Serializer):
    endpoint = serializers.CharField()


class SendNotificationSerializer(serializers.Serializer):
    """Staff-only manual send: one user_id or a list of user_ids."""
    user_id = serializers.PrimaryKeyRelatedField(queryset=User.objects.all(), required=False)
    user_ids = serializers.PrimaryKeyRelatedField(queryset=User.objects.all(), many=True, required=False)
    type = serializers.ChoiceField(choices=NotificationType.choices)
    data = serializers.DictField(required=False, default=dict)

    def validate(self, attrs):
        if not attrs.get('user_id') and not attrs.get('user_ids'):
            raise serializers.ValidationError({'user_id': "Provide user_id or user_ids."})
        return attrs
