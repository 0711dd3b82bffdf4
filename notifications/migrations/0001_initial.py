from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='NotificationPreference',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('enabled', models.BooleanField(default=True, help_text='Master switch for all push notifications.')),
                ('task_reminders', models.BooleanField(default=True, help_text='Reminders before a task is due.')),
                ('urgent_alerts', models.BooleanField(default=True, help_text='Alerts when an urgent task is assigned.')),
                ('daily_digest', models.BooleanField(default=False, help_text='One summary of the tasks due today.')),
                ('new_task_assigned', models.BooleanField(default=True, help_text='Alerts when a task is assigned.')),
                ('task_overdue', models.BooleanField(default=True, help_text='Alerts when an assigned task becomes overdue.')),
                ('reminder_hours_before', models.PositiveSmallIntegerField(default=24, help_text='How many hours before the due date reminders are sent (1-168).', validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(168)])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='notification_preferences', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Notification Preference',
                'verbose_name_plural': 'Notification Preferences',
            },
        ),
        migrations.CreateModel(
            name='PushSubscription',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('endpoint', models.TextField(unique=True)),
                ('p256dh', models.CharField(help_text='Client public key for payload encryption.', max_length=255)),
                ('auth', models.CharField(help_text='Client auth secret for payload encryption.', max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='push_subscriptions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Push Subscription',
                'verbose_name_plural': 'Push Subscriptions',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='NotificationReceipt',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('key', models.CharField(max_length=191, unique=True)),
                ('notification_type', models.CharField(choices=[('task_due_soon', 'Task due soon'), ('task_overdue', 'Task overdue'), ('urgent_task_assigned', 'Urgent task assigned'), ('new_task_assigned', 'New task assigned'), ('daily_digest', 'Daily digest')], max_length=30)),
                ('sent_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='notification_receipts', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-sent_at'],
            },
        ),
    ]
