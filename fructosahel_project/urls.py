# fructosahel_project/urls.py
from django.contrib import admin
from django.urls import path, include

from rest_framework_simplejwt.views import (
    TokenObtainPairView,
    TokenRefreshView,
)

from tasks.feeds import task_calendar_feed

urlpatterns = [
    path('admin/', admin.site.urls),

    # --- API ---
    path('api/', include('farms.urls')),
    path('api/', include('tasks.urls')),
    path('api/notifications/', include('notifications.urls')),
    path('api/analytics/', include('analytics.urls')),

    # Calendar subscription feed (signed token, no session required)
    path('tasks/feed/<str:token>.ics', task_calendar_feed, name='task_calendar_feed'),

    path('api/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('api/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
]
