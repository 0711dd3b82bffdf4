# tasks/calendar_service.py
import calendar
from collections import defaultdict
from datetime import datetime, time, timedelta

from django.utils import timezone

from .utils import classify_due_state, get_month_start_end, shift_month, DUE_STATE_OVERDUE

# Calendar grid weeks start on Sunday
WEEK_STARTS_ON = calendar.SUNDAY


def _local_due_date(task):
    if task.due_date is None:
        return None
    return timezone.localtime(task.due_date).date()


def tasks_by_day(tasks, month, year):
    """
    Groups the tasks whose (local) due date falls in year/month by day of month.
    Tasks keep their input order within a day; the input is left untouched.
    """
    grouped = defaultdict(list)
    for task in tasks:
        due = _local_due_date(task)
        if due is None or due.year != year or due.month != month:
            continue
        grouped[due.day].append(task)
    return dict(grouped)


def summarize_month(tasks, month, year, now=None):
    """
    Builds the per-day view of a month: task count, overdue flag and whether
    the day is today. `now` defaults to the current time on every call.
    """
    now = now or timezone.now()
    today = timezone.localtime(now).date()
    start_date, _ = get_month_start_end(year, month)

    days = []
    for day, day_tasks in sorted(tasks_by_day(tasks, month, year).items()):
        day_date = start_date.replace(day=day)
        days.append({
            'day': day,
            'date': day_date,
            'task_count': len(day_tasks),
            'has_overdue': any(
                classify_due_state(t.due_date, t.status, now) == DUE_STATE_OVERDUE for t in day_tasks
            ),
            'is_today': day_date == today,
            'tasks': day_tasks,
        })
    return days


def month_grid(month, year):
    """
    Returns the weeks (lists of 7 dates) shown for a month, padded with the
    trailing days of the previous month and the leading days of the next.
    """
    cal = calendar.Calendar(firstweekday=WEEK_STARTS_ON)
    return cal.monthdatescalendar(year, month)


def month_navigation(year, month):
    prev_year, prev_month = shift_month(year, month, -1)
    next_year, next_month = shift_month(year, month, 1)
    return {
        'previous': {'year': prev_year, 'month': prev_month},
        'next': {'year': next_year, 'month': next_month},
    }


def month_bounds(year, month):
    """Aware datetimes [start, end) covering the month in local time."""
    start_date, end_date = get_month_start_end(year, month)
    tz = timezone.get_current_timezone()
    start = timezone.make_aware(datetime.combine(start_date, time.min), tz)
    end = timezone.make_aware(
        datetime.combine(end_date + timedelta(days=1), time.min), tz
    )
    return start, end
