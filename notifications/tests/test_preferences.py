from django.contrib.auth.models import User
from django.test import TestCase

from notifications.models import NotificationPreference, NotificationType
from notifications.preferences import resolve_preferences, resolve_many, default_preference_values


class ResolvePreferencesTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username='amadou', password='password')

    def test_defaults_when_nothing_stored(self):
        prefs = resolve_preferences(self.user.pk)
        self.assertTrue(prefs.is_default)
        self.assertTrue(prefs.enabled)
        self.assertTrue(prefs.task_reminders)
        self.assertTrue(prefs.urgent_alerts)
        self.assertTrue(prefs.new_task_assigned)
        self.assertTrue(prefs.task_overdue)
        self.assertFalse(prefs.daily_digest)
        self.assertEqual(prefs.reminder_hours_before, 24)

    def test_resolving_never_writes(self):
        resolve_preferences(self.user.pk)
        resolve_preferences(self.user.pk)
        self.assertFalse(NotificationPreference.objects.exists())

    def test_resolving_is_idempotent(self):
        NotificationPreference.objects.create(user=self.user, daily_digest=True, reminder_hours_before=6)
        self.assertEqual(resolve_preferences(self.user.pk), resolve_preferences(self.user.pk))

    def test_stored_values_win(self):
        NotificationPreference.objects.create(user=self.user, task_reminders=False, reminder_hours_before=48)
        prefs = resolve_preferences(self.user.pk)
        self.assertFalse(prefs.is_default)
        self.assertFalse(prefs.task_reminders)
        self.assertEqual(prefs.reminder_hours_before, 48)

    def test_defaults_match_model_fields(self):
        self.assertEqual(default_preference_values()['reminder_hours_before'], 24)
        self.assertFalse(default_preference_values()['daily_digest'])

    def test_resolve_many_mixes_stored_and_default(self):
        other = User.objects.create_user(username='fatou', password='password')
        NotificationPreference.objects.create(user=other, enabled=False)
        prefs = resolve_many([self.user.pk, other.pk, self.user.pk])
        self.assertEqual(list(prefs), [self.user.pk, other.pk])
        self.assertTrue(prefs[self.user.pk].is_default)
        self.assertFalse(prefs[other.pk].enabled)


class AllowsTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username='amadou', password='password')

    def test_each_type_follows_its_flag(self):
        flags = {
            NotificationType.TASK_DUE_SOON: 'task_reminders',
            NotificationType.TASK_OVERDUE: 'task_overdue',
            NotificationType.URGENT_TASK_ASSIGNED: 'urgent_alerts',
            NotificationType.NEW_TASK_ASSIGNED: 'new_task_assigned',
            NotificationType.DAILY_DIGEST: 'daily_digest',
        }
        for notification_type, flag in flags.items():
            values = {name: True for name in flags.values()}
            values[flag] = False
            NotificationPreference.objects.update_or_create(user=self.user, defaults=values)
            prefs = resolve_preferences(self.user.pk)
            self.assertFalse(prefs.allows(notification_type), notification_type)
            self.assertTrue(prefs.disabled_reason(notification_type).endswith("disabled by preference"))

    def test_master_switch_blocks_everything(self):
        NotificationPreference.objects.create(user=self.user, enabled=False, daily_digest=True)
        prefs = resolve_preferences(self.user.pk)
        for notification_type in NotificationType.values:
            self.assertFalse(prefs.allows(notification_type))
            self.assertEqual(prefs.disabled_reason(notification_type), "Notifications disabled by preference")

    def test_allowed_type_has_no_reason(self):
        prefs = resolve_preferences(self.user.pk)
        self.assertTrue(prefs.allows(NotificationType.TASK_OVERDUE))
        self.assertIsNone(prefs.disabled_reason(NotificationType.TASK_OVERDUE))
