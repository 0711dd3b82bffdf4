# farms/models.py
from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator


class Farm(models.Model):
    class Country(models.TextChoices):
        BURKINA_FASO = 'burkina_faso', 'Burkina Faso'
        MALI = 'mali', 'Mali'
        NIGER = 'niger', 'Niger'

    name = models.CharField(max_length=255)
    location = models.CharField(max_length=255, blank=True, help_text="Village, commune or GPS description.")
    country = models.CharField(max_length=20, choices=Country.choices, default=Country.BURKINA_FASO)
    size_hectares = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True,
        validators=[MinValueValidator(0)],
    )
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='farms'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name


class Crop(models.Model):
    class CropType(models.TextChoices):
        PINEAPPLE = 'pineapple', 'Pineapple'
        CASHEW = 'cashew', 'Cashew'
        AVOCADO = 'avocado', 'Avocado'
        MANGO = 'mango', 'Mango'
        BANANA = 'banana', 'Banana'
        PAPAYA = 'papaya', 'Papaya'
        POTATO = 'potato', 'Potato'
        COWPEA = 'cowpea', 'Cowpea'
        BAMBARA_GROUNDNUT = 'bambara_groundnut', 'Bambara groundnut'
        SORGHUM = 'sorghum', 'Sorghum'
        PEARL_MILLET = 'pearl_millet', 'Pearl millet'
        MORINGA = 'moringa', 'Moringa'
        SWEET_POTATO = 'sweet_potato', 'Sweet potato'
        ONION = 'onion', 'Onion'
        RICE = 'rice', 'Rice'
        TOMATO = 'tomato', 'Tomato'
        PEPPER = 'pepper', 'Pepper'
        OKRA = 'okra', 'Okra'
        PEANUT = 'peanut', 'Peanut'
        CASSAVA = 'cassava', 'Cassava'
        PIGEON_PEA = 'pigeon_pea', 'Pigeon pea'
        CITRUS = 'citrus', 'Citrus'
        GUAVA = 'guava', 'Guava'

    class Status(models.TextChoices):
        PLANNING = 'planning', 'Planning'
        PLANTED = 'planted', 'Planted'
        GROWING = 'growing', 'Growing'
        FLOWERING = 'flowering', 'Flowering'
        FRUITING = 'fruiting', 'Fruiting'
        HARVESTING = 'harvesting', 'Harvesting'
        HARVESTED = 'harvested', 'Harvested'
        DORMANT = 'dormant', 'Dormant'

    farm = models.ForeignKey(Farm, on_delete=models.CASCADE, related_name='crops')
    crop_type = models.CharField(max_length=30, choices=CropType.choices)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PLANNING)
    planting_date = models.DateField(null=True, blank=True)
    expected_harvest_date = models.DateField(null=True, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['farm__name', 'crop_type']

    def __str__(self):
        return f"{self.get_crop_type_display()} ({self.farm.name})"
