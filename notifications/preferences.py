# notifications/preferences.py
from dataclasses import dataclass, asdict

from .models import NotificationPreference, NotificationType

# Which preference flag gates which notification type
CATEGORY_FLAGS = {
    NotificationType.TASK_DUE_SOON: 'task_reminders',
    NotificationType.TASK_OVERDUE: 'task_overdue',
    NotificationType.URGENT_TASK_ASSIGNED: 'urgent_alerts',
    NotificationType.NEW_TASK_ASSIGNED: 'new_task_assigned',
    NotificationType.DAILY_DIGEST: 'daily_digest',
}

# Human label used in the "disabled by preference" reasons
CATEGORY_LABELS = {
    NotificationType.TASK_DUE_SOON: 'Task reminders',
    NotificationType.TASK_OVERDUE: 'Overdue alerts',
    NotificationType.URGENT_TASK_ASSIGNED: 'Urgent alerts',
    NotificationType.NEW_TASK_ASSIGNED: 'New task alerts',
    NotificationType.DAILY_DIGEST: 'Daily digest',
}

PREFERENCE_FIELDS = (
    'enabled', 'task_reminders', 'urgent_alerts', 'daily_digest',
    'new_task_assigned', 'task_overdue', 'reminder_hours_before',
)


def default_preference_values():
    """Field defaults, read from the model so there is one source of truth."""
    return {name: NotificationPreference._meta.get_field(name).default for name in PREFERENCE_FIELDS}


@dataclass(frozen=True)
class EffectivePreferences:
    user_id: int
    enabled: bool
    task_reminders: bool
    urgent_alerts: bool
    daily_digest: bool
    new_task_assigned: bool
    task_overdue: bool
    reminder_hours_before: int
    is_default: bool = False

    @classmethod
    def from_instance(cls, instance):
        return cls(
            user_id=instance.user_id,
            is_default=False,
            **{name: getattr(instance, name) for name in PREFERENCE_FIELDS},
        )

    @classmethod
    def defaults_for(cls, user_id):
        return cls(user_id=user_id, is_default=True, **default_preference_values())

    def allows(self, notification_type):
        """True when both the master switch and the type's category flag are on."""
        if not self.enabled:
            return False
        return bool(getattr(self, CATEGORY_FLAGS[notification_type]))

    def disabled_reason(self, notification_type):
        if not self.enabled:
            return "Notifications disabled by preference"
        if not self.allows(notification_type):
            return f"{CATEGORY_LABELS[notification_type]} disabled by preference"
        return None

    def as_dict(self):
        return asdict(self)


def resolve_preferences(user_id):
    """
    Returns the stored preferences of a user, or the documented defaults
    (flagged is_default) when the user never saved any. Never writes.
    """
    instance = NotificationPreference.objects.filter(user_id=user_id).first()
    if instance is None:
        return EffectivePreferences.defaults_for(user_id)
    return EffectivePreferences.from_instance(instance)


def resolve_many(user_ids):
    """Bulk version of resolve_preferences, keyed by user id."""
    user_ids = list(dict.fromkeys(user_ids))
    stored = {
        pref.user_id: EffectivePreferences.from_instance(pref)
        for pref in NotificationPreference.objects.filter(user_id__in=user_ids)
    }
    return {uid: stored.get(uid) or EffectivePreferences.defaults_for(uid) for uid in user_ids}
