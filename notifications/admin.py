# notifications/admin.py
from django.contrib import admin
from .models import NotificationPreference, PushSubscription, NotificationReceipt


@admin.register(NotificationPreference)
class NotificationPreferenceAdmin(admin.ModelAdmin):
    list_display = ('user', 'enabled', 'task_reminders', 'task_overdue', 'urgent_alerts', 'daily_digest',
                    'reminder_hours_before')
    list_filter = ('enabled', 'daily_digest')
    search_fields = ('user__username', 'user__email')


@admin.register(PushSubscription)
class PushSubscriptionAdmin(admin.ModelAdmin):
    list_display = ('user', 'short_endpoint', 'created_at', 'updated_at')
    search_fields = ('user__username', 'endpoint')
    readonly_fields = ('created_at', 'updated_at')

    @admin.display(description="Endpoint")
    def short_endpoint(self, obj):
        return obj.endpoint[:60]


@admin.register(NotificationReceipt)
class NotificationReceiptAdmin(admin.ModelAdmin):
    list_display = ('key', 'user', 'notification_type', 'sent_at')
    list_filter = ('notification_type',)
    search_fields = ('key', 'user__username')
