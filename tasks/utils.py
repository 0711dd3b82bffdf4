# tasks/utils.py

import calendar
from datetime import date, timedelta

DUE_STATE_OVERDUE = 'overdue'
DUE_STATE_DUE_SOON = 'due_soon'
DUE_STATE_NONE = 'none'

DEFAULT_LOOKAHEAD_HOURS = 24

# Statuses that can never be overdue
CLOSED_STATUSES = frozenset({'completed', 'cancelled'})


def classify_due_state(due_date, status, now, lookahead_hours=DEFAULT_LOOKAHEAD_HOURS):
    """
    Classifies a task against `now`.

    - 'overdue'  : due_date < now and the task is not completed/cancelled.
    - 'due_soon' : now <= due_date < now + lookahead_hours and the task is pending.
    - 'none'     : everything else, including tasks without a due date.

    Pure function: the caller supplies the clock.
    """
    if due_date is None:
        return DUE_STATE_NONE

    if due_date < now:
        return DUE_STATE_NONE if status in CLOSED_STATUSES else DUE_STATE_OVERDUE

    if status == 'pending' and due_date < now + timedelta(hours=lookahead_hours):
        return DUE_STATE_DUE_SOON

    return DUE_STATE_NONE


def get_month_start_end(year, month):
    """Returns the first and last day of a given month and year."""
    _, num_days = calendar.monthrange(year, month)
    start_date = date(year, month, 1)
    end_date = date(year, month, num_days)
    return start_date, end_date


def shift_month(year, month, delta):
    """Moves (year, month) by `delta` months, rolling the year over as needed."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1
