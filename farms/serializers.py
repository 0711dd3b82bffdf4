# farms/serializers.py
from rest_framework import serializers
from .models import Farm, Crop


class CropSerializer(serializers.ModelSerializer):
    class Meta:
        model = Crop
        fields = [
            'id', 'farm', 'crop_type', 'status', 'planting_date',
            'expected_harvest_date', 'notes', 'created_at',
        ]
        read_only_fields = ['id', 'created_at']

    def validate(self, attrs):
        planting = attrs.get('planting_date', getattr(self.instance, 'planting_date', None))
        harvest = attrs.get('expected_harvest_date', getattr(self.instance, 'expected_harvest_date', None))
        if planting and harvest and harvest < planting:
            raise serializers.ValidationError(
                {'expected_harvest_date': "Expected harvest date cannot be before the planting date."}
            )
        return attrs


class FarmSerializer(serializers.ModelSerializer):
    owner = serializers.PrimaryKeyRelatedField(read_only=True)
    crop_count = serializers.IntegerField(source='crops.count', read_only=True)

    class Meta:
        model = Farm
        fields = ['id', 'name', 'location', 'country', 'size_hectares', 'owner', 'crop_count', 'created_at']
        read_only_fields = ['id', 'created_at']
