# tasks/admin.py
from django.contrib import admin
from django.utils import timezone

from .models import Task
from .utils import DUE_STATE_OVERDUE


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ('title', 'assigned_to', 'status', 'priority', 'due_date', 'is_overdue')
    list_filter = ('status', 'priority', 'farm')
    search_fields = ('title', 'description', 'assigned_to__username')
    date_hierarchy = 'due_date'
    autocomplete_fields = ['farm']
    readonly_fields = ('completed_at', 'created_at', 'updated_at')
    actions = ['mark_completed']

    @admin.display(boolean=True, description="Overdue")
    def is_overdue(self, obj):
        return obj.due_state(now=timezone.now()) == DUE_STATE_OVERDUE

    @admin.action(description="Mark selected tasks as completed")
    def mark_completed(self, request, queryset):
        count = 0
        for task in queryset.exclude(status=Task.Status.COMPLETED):
            task.status = Task.Status.COMPLETED
            task.save()
            count += 1
        self.message_user(request, f"{count} task(s) marked as completed.")
