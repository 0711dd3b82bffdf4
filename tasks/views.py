# tasks/views.py
import logging

from django.db import transaction
from django.db.models import Case, When, IntegerField
from django.urls import reverse
from django.utils import timezone
from rest_framework import viewsets, serializers
from rest_framework.decorators import action
from rest_framework.response import Response

from notifications.background import run_in_background
from notifications.services import NotificationService
from .calendar_service import summarize_month, month_grid, month_navigation, month_bounds
from .feeds import make_feed_token
from .models import Task
from .serializers import TaskSerializer
from .utils import classify_due_state, DUE_STATE_OVERDUE

logger = logging.getLogger(__name__)

STATUS_ORDER = ['pending', 'in_progress', 'completed', 'cancelled']


def _send_assignment(task):
    NotificationService().notify_task_assigned(task)


def _notify_assignee(task):
    """Queues the assignment push once the surrounding transaction commits."""
    def enqueue():
        try:
            run_in_background(_send_assignment, task)
        except RuntimeError:
            # Executor already shut down, the process is exiting
            logger.exception("Could not queue assignment notification for task %s", task.pk)

    transaction.on_commit(enqueue)


def _parse_month_params(params):
    today = timezone.localdate()
    try:
        year = int(params.get('year', today.year))
        month = int(params.get('month', today.month))
    except (TypeError, ValueError):
        raise serializers.ValidationError({'month': "Year and month must be integers."})
    if not 1 <= month <= 12:
        raise serializers.ValidationError({'month': "Month must be between 1 and 12."})
    if not 1 <= year <= 9998:
        raise serializers.ValidationError({'year': "Year is out of range."})
    return year, month


class TaskViewSet(viewsets.ModelViewSet):
    """
    Tasks API: list/create on the collection, read/patch/delete on a task,
    plus the month calendar and the iCalendar subscription link.
    """
    queryset = Task.objects.all()
    serializer_class = TaskSerializer
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        queryset = Task.objects.select_related('farm', 'crop', 'assigned_to', 'created_by')
        params = self.request.query_params

        if params.get('farm'):
            queryset = queryset.filter(farm_id=params['farm'])
        if params.get('assigned_to'):
            queryset = queryset.filter(assigned_to_id=params['assigned_to'])
        if params.get('status'):
            queryset = queryset.filter(status=params['status'])
        if params.get('priority'):
            queryset = queryset.filter(priority=params['priority'])

        return queryset.annotate(
            status_rank=Case(
                *[When(status=value, then=rank) for rank, value in enumerate(STATUS_ORDER)],
                output_field=IntegerField(),
            ),
            priority_rank=Case(
                *[When(priority=value, then=rank) for value, rank in Task.PRIORITY_RANK.items()],
                output_field=IntegerField(),
            ),
        ).order_by('status_rank', '-priority_rank', 'due_date')

    def perform_create(self, serializer):
        task = serializer.save(created_by=self.request.user)
        if task.assigned_to_id:
            _notify_assignee(task)

    def perform_update(self, serializer):
        previous_assignee = serializer.instance.assigned_to_id
        task = serializer.save()
        if task.assigned_to_id and task.assigned_to_id != previous_assignee:
            _notify_assignee(task)

    @action(detail=False, methods=['get'], url_path='calendar')
    def calendar(self, request):
        year, month = _parse_month_params(request.query_params)
        now = timezone.now()
        today = timezone.localtime(now).date()

        start, end = month_bounds(year, month)
        tasks = list(self.get_queryset().filter(due_date__gte=start, due_date__lt=end))

        days = summarize_month(tasks, month, year, now=now)
        by_date = {d['date']: d for d in days}
        context = {**self.get_serializer_context(), 'now': now}

        weeks = []
        for week in month_grid(month, year):
            weeks.append([
                {
                    'date': day,
                    'in_month': day.month == month,
                    'is_today': day == today,
                    'task_count': by_date[day]['task_count'] if day in by_date else 0,
                    'has_overdue': by_date[day]['has_overdue'] if day in by_date else False,
                }
                for day in week
            ])

        return Response({
            'year': year,
            'month': month,
            'today': today,
            **month_navigation(year, month),
            'days': [
                {**d, 'tasks': TaskSerializer(d['tasks'], many=True, context=context).data}
                for d in days
            ],
            'weeks': weeks,
            'overdue_count': sum(
                1 for t in tasks if classify_due_state(t.due_date, t.status, now) == DUE_STATE_OVERDUE
            ),
        })

    @action(detail=False, methods=['get'], url_path='calendar/feed-url')
    def calendar_feed_url(self, request):
        token = make_feed_token(request.user)
        path = reverse('task_calendar_feed', args=[token])
        return Response({'url': request.build_absolute_uri(path)})
