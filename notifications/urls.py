# notifications/urls.py
from django.urls import path
from . import views

app_name = 'notifications'

urlpatterns = [
    path('preferences/', views.NotificationPreferencesView.as_view(), name='preferences'),
    path('subscribe/', views.PushSubscriptionView.as_view(), name='subscribe'),
    path('send/', views.SendNotificationView.as_view(), name='send'),
    path('cron/', views.CronView.as_view(), name='cron'),
]
