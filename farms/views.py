# farms/views.py
from rest_framework import viewsets
from .models import Farm, Crop
from .serializers import FarmSerializer, CropSerializer


class FarmViewSet(viewsets.ModelViewSet):
    """
    CRUD endpoint for farms. New farms are owned by the user who creates them.
    """
    queryset = Farm.objects.all()
    serializer_class = FarmSerializer

    def perform_create(self, serializer):
        serializer.save(owner=self.request.user)


class CropViewSet(viewsets.ModelViewSet):
    queryset = Crop.objects.select_related('farm')
    serializer_class = CropSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        farm_id = self.request.query_params.get('farm')
        if farm_id:
            queryset = queryset.filter(farm_id=farm_id)
        return queryset
