# farms/admin.py
from django.contrib import admin
from .models import Farm, Crop


class CropInline(admin.TabularInline):
    model = Crop
    extra = 0
    fields = ('crop_type', 'status', 'planting_date', 'expected_harvest_date')


@admin.register(Farm)
class FarmAdmin(admin.ModelAdmin):
    list_display = ('name', 'country', 'location', 'size_hectares', 'owner')
    list_filter = ('country',)
    search_fields = ('name', 'location')
    inlines = [CropInline]


@admin.register(Crop)
class CropAdmin(admin.ModelAdmin):
    list_display = ('__str__', 'crop_type', 'status', 'planting_date', 'expected_harvest_date')
    list_filter = ('crop_type', 'status')
    search_fields = ('farm__name', 'notes')
    autocomplete_fields = ['farm']
