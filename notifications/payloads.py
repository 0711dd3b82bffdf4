# notifications/payloads.py
from django.utils.translation import gettext as _

from .models import NotificationType

ICON = '/icon-192.png'
TASKS_URL = '/dashboard/tasks'


def _task_payload(notification_type, data, title, body, tag_prefix, actions, require_interaction=False):
    return {
        'title': title,
        'body': body,
        'tag': f"{tag_prefix}-{data.get('task_id')}",
        'require_interaction': require_interaction,
        'data': {'type': notification_type, 'task_id': data.get('task_id'), 'url': TASKS_URL},
        'actions': actions,
    }


def build_payload(notification_type, data):
    """
    Builds the JSON-serialisable push payload for a notification type.
    `data` carries the template values (task_id, task_title, hours_remaining,
    task_count). Raises ValueError for unknown types.
    """
    title = data.get('task_title', '')

    if notification_type == NotificationType.TASK_DUE_SOON:
        payload = _task_payload(
            notification_type, data,
            title=_("Task Due Soon"),
            body=_('"%(title)s" is due in %(hours)s hours') % {
                'title': title, 'hours': data.get('hours_remaining'),
            },
            tag_prefix='task-due',
            actions=[
                {'action': 'view', 'title': _("View Task")},
                {'action': 'dismiss', 'title': _("Dismiss")},
            ],
        )
    elif notification_type == NotificationType.TASK_OVERDUE:
        payload = _task_payload(
            notification_type, data,
            title=_("Task Overdue"),
            body=_('"%(title)s" is now overdue!') % {'title': title},
            tag_prefix='task-overdue',
            actions=[
                {'action': 'view', 'title': _("View Task")},
                {'action': 'complete', 'title': _("Mark Complete")},
            ],
            require_interaction=True,
        )
    elif notification_type == NotificationType.URGENT_TASK_ASSIGNED:
        payload = _task_payload(
            notification_type, data,
            title=_("Urgent Task Assigned"),
            body=_('You have been assigned an urgent task: "%(title)s"') % {'title': title},
            tag_prefix='task-urgent',
            actions=[
                {'action': 'view', 'title': _("View Task")},
                {'action': 'acknowledge', 'title': _("Acknowledge")},
            ],
            require_interaction=True,
        )
    elif notification_type == NotificationType.NEW_TASK_ASSIGNED:
        payload = _task_payload(
            notification_type, data,
            title=_("New Task Assigned"),
            body=_('You have been assigned a new task: "%(title)s"') % {'title': title},
            tag_prefix='task-new',
            actions=[{'action': 'view', 'title': _("View Task")}],
        )
    elif notification_type == NotificationType.DAILY_DIGEST:
        payload = {
            'title': _("Daily Task Summary"),
            'body': _("You have %(count)s tasks due today") % {'count': data.get('task_count')},
            'tag': 'daily-digest',
            'require_interaction': False,
            'data': {'type': notification_type, 'url': TASKS_URL},
            'actions': [{'action': 'view', 'title': _("View Tasks")}],
        }
    else:
        raise ValueError(f"Unknown notification type: {notification_type}")

    payload.update({'type': str(notification_type), 'icon': ICON, 'badge': ICON})
    payload['data']['type'] = str(notification_type)
    return payload
