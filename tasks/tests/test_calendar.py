import calendar
from datetime import date, datetime, timedelta
from unittest import mock

from django.contrib.auth.models import User
from django.test import TestCase
from django.utils import timezone

from tasks.calendar_service import tasks_by_day, summarize_month, month_grid, month_navigation, month_bounds
from tasks.models import Task


def aware(*args):
    return timezone.make_aware(datetime(*args))


class CalendarServiceTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username='amadou', password='password')
        self.tasks = [
            Task(title='Plant', created_by=self.user, due_date=aware(2025, 6, 3, 9)),
            Task(title='Water', created_by=self.user, due_date=aware(2025, 6, 3, 17)),
            Task(title='Harvest', created_by=self.user, due_date=aware(2025, 6, 20, 8),
                 status=Task.Status.COMPLETED),
            Task(title='Next month', created_by=self.user, due_date=aware(2025, 7, 1, 8)),
            Task(title='Undated', created_by=self.user),
        ]

    def test_groups_by_day_in_order(self):
        grouped = tasks_by_day(self.tasks, 6, 2025)
        self.assertEqual(sorted(grouped), [3, 20])
        self.assertEqual([t.title for t in grouped[3]], ['Plant', 'Water'])

    def test_grouping_is_repeatable_and_pure(self):
        snapshot = list(self.tasks)
        first = tasks_by_day(self.tasks, 6, 2025)
        second = tasks_by_day(self.tasks, 6, 2025)
        self.assertEqual(first, second)
        self.assertEqual(self.tasks, snapshot)

    def test_month_boundaries_use_local_time(self):
        # 23:30 on the last day of May stays in May
        task = Task(title='Late', created_by=self.user, due_date=aware(2025, 5, 31, 23, 30))
        self.assertEqual(tasks_by_day([task], 6, 2025), {})
        self.assertEqual(list(tasks_by_day([task], 5, 2025)), [31])

    def test_summary_flags(self):
        now = aware(2025, 6, 10, 12)
        days = {d['day']: d for d in summarize_month(self.tasks, 6, 2025, now=now)}

        self.assertTrue(days[3]['has_overdue'])
        self.assertEqual(days[3]['task_count'], 2)
        # Completed tasks never count as overdue
        self.assertFalse(days[20]['has_overdue'])
        self.assertFalse(days[3]['is_today'])

    def test_is_today_follows_the_clock(self):
        days = summarize_month(self.tasks, 6, 2025, now=aware(2025, 6, 3, 7))
        self.assertTrue(days[0]['is_today'])

        days = summarize_month(self.tasks, 6, 2025, now=aware(2025, 6, 4, 0, 5))
        self.assertFalse(days[0]['is_today'])

    def test_default_now_is_read_on_every_call(self):
        with mock.patch('tasks.calendar_service.timezone.now', return_value=aware(2025, 6, 3, 10)):
            self.assertTrue(summarize_month(self.tasks, 6, 2025)[0]['is_today'])
        with mock.patch('tasks.calendar_service.timezone.now', return_value=aware(2025, 6, 21, 10)):
            self.assertFalse(summarize_month(self.tasks, 6, 2025)[0]['is_today'])

    def test_month_grid_starts_on_sunday(self):
        weeks = month_grid(6, 2025)
        self.assertEqual(weeks[0][0], date(2025, 6, 1))  # June 1st 2025 is a Sunday
        for week in weeks:
            self.assertEqual(len(week), 7)
            self.assertEqual(week[0].weekday(), calendar.SUNDAY)

        weeks = month_grid(2, 2025)
        self.assertEqual(weeks[0][0], date(2025, 1, 26))
        self.assertEqual(weeks[-1][-1], date(2025, 3, 1))

    def test_navigation(self):
        self.assertEqual(month_navigation(2025, 1), {
            'previous': {'year': 2024, 'month': 12},
            'next': {'year': 2025, 'month': 2},
        })

    def test_bounds(self):
        start, end = month_bounds(2025, 12)
        self.assertEqual(start, aware(2025, 12, 1))
        self.assertEqual(end - start, timedelta(days=31))
