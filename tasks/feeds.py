from datetime import timedelta

from django.core.signing import TimestampSigner, BadSignature
from django.http import HttpResponse, Http404
from django.utils import timezone
import icalendar

from .models import Task

feed_signer = TimestampSigner(salt='tasks.calendar_feed')

# How far back completed history is kept in the feed
FEED_HISTORY_DAYS = 90


def make_feed_token(user):
    return feed_signer.sign(str(user.pk))


def task_calendar_feed(request, token):
    """
    iCalendar feed of the tasks assigned to the user encoded in `token`.
    Tokens do not expire so calendar apps can keep polling the same URL.
    """
    try:
        user_id = feed_signer.unsign(token)
    except BadSignature:
        raise Http404("Invalid calendar token")

    now = timezone.now()
    tasks = Task.objects.filter(
        assigned_to_id=user_id,
        due_date__isnull=False,
        due_date__gte=now - timedelta(days=FEED_HISTORY_DAYS),
    ).select_related('farm')

    cal = icalendar.Calendar()
    cal.add('prodid', '-//FructoSahel//fructosahel.com//EN')
    cal.add('version', '2.0')
    cal.add('X-WR-CALNAME', 'FructoSahel Tasks')

    for task in tasks:
        event = icalendar.Event()

        summary = task.title
        if task.status == Task.Status.COMPLETED:
            summary = f"DONE: {summary}"
        elif task.status == Task.Status.CANCELLED:
            summary = f"CANCELLED: {summary}"
        elif task.is_urgent:
            summary = f"URGENT: {summary}"
        event.add('summary', summary)

        event.add('dtstart', task.due_date)
        event.add('dtend', task.due_date + timedelta(hours=1))
        event.add('dtstamp', now)

        if task.farm:
            event.add('location', task.farm.name)

        description = f"Priority: {task.get_priority_display()} / Status: {task.get_status_display()}"
        if task.description:
            description = f"{task.description}\n\n{description}"
        event.add('description', description)

        # Stable UID so calendar clients update events in place
        event.add('uid', f"task_{task.id}@fructosahel.com")
        event.add('sequence', 0)

        cal.add_component(event)

    response = HttpResponse(cal.to_ical(), content_type='text/calendar; charset=utf-8')
    response['Content-Disposition'] = 'inline; filename=fructosahel_tasks.ics'
    return response
