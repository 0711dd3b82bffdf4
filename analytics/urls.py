# analytics/urls.py
from django.urls import path
from .views import TrackEventView

app_name = 'analytics'

urlpatterns = [
    path('track/', TrackEventView.as_view(), name='track'),
]
