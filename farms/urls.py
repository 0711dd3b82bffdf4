# farms/urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import FarmViewSet, CropViewSet

router = DefaultRouter()
router.register(r'farms', FarmViewSet)
router.register(r'crops', CropViewSet)

urlpatterns = [
    path('', include(router.urls)),
]
