# notifications/management/commands/send_task_notifications.py

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from notifications.jobs import run_job, UnknownJobError, JOB_NAMES


class Command(BaseCommand):
    help = 'Runs the scheduled task notification jobs (due reminders, overdue alerts, daily digest).'

    def add_arguments(self, parser):
        parser.add_argument(
            '--job',
            type=str,
            default='all',
            choices=JOB_NAMES,
            help='Which job to run. Defaults to all of them, in sequence.',
        )

    def handle(self, *args, **options):
        job = options['job']
        now = timezone.now()
        self.stdout.write(f"[{timezone.localtime(now):%Y-%m-%d %H:%M}] Running send_task_notifications ({job})")

        try:
            results = run_job(job, now=now)
        except UnknownJobError as e:
            raise CommandError(str(e))

        for name, counts in results.items():
            line = f"  {name}: {counts['checked']} checked, {counts['sent']} sent, {counts['failed']} failed"
            if counts['failed']:
                self.stdout.write(self.style.WARNING(line))
            else:
                self.stdout.write(line)

        self.stdout.write(self.style.SUCCESS("Done."))
