# tasks/serializers.py
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework import serializers

from .models import Task

User = get_user_model()


class TaskSerializer(serializers.ModelSerializer):
    """
    Task representation used by the dashboard. `due_state` is computed
    against the current time on every serialization.
    """
    assigned_to = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.filter(is_active=True), required=False, allow_null=True
    )
    created_by = serializers.PrimaryKeyRelatedField(read_only=True)
    farm_name = serializers.CharField(source='farm.name', read_only=True, default=None)
    due_state = serializers.SerializerMethodField()

    class Meta:
        model = Task
        fields = [
            'id', 'title', 'description', 'farm', 'farm_name', 'crop', 'assigned_to', 'created_by',
            'status', 'priority', 'due_date', 'due_state', 'completed_at', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'completed_at', 'created_at', 'updated_at']

    def get_due_state(self, obj):
        now = self.context.get('now') or timezone.now()
        return obj.due_state(now=now)

    def validate(self, attrs):
        farm = attrs.get('farm', getattr(self.instance, 'farm', None))
        crop = attrs.get('crop', getattr(self.instance, 'crop', None))
        if farm and crop and crop.farm_id != farm.id:
            raise serializers.ValidationError({'crop': "Crop does not belong to the selected farm."})
        return attrs
