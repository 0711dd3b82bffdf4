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
            name='Farm',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('location', models.CharField(blank=True, help_text='Village, commune or GPS description.', max_length=255)),
                ('country', models.CharField(choices=[('burkina_faso', 'Burkina Faso'), ('mali', 'Mali'), ('niger', 'Niger')], default='burkina_faso', max_length=20)),
                ('size_hectares', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(0)])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('owner', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='farms', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Crop',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('crop_type', models.CharField(choices=[('pineapple', 'Pineapple'), ('cashew', 'Cashew'), ('avocado', 'Avocado'), ('mango', 'Mango'), ('banana', 'Banana'), ('papaya', 'Papaya'), ('potato', 'Potato'), ('cowpea', 'Cowpea'), ('bambara_groundnut', 'Bambara groundnut'), ('sorghum', 'Sorghum'), ('pearl_millet', 'Pearl millet'), ('moringa', 'Moringa'), ('sweet_potato', 'Sweet potato'), ('onion', 'Onion'), ('rice', 'Rice'), ('tomato', 'Tomato'), ('pepper', 'Pepper'), ('okra', 'Okra'), ('peanut', 'Peanut'), ('cassava', 'Cassava'), ('pigeon_pea', 'Pigeon pea'), ('citrus', 'Citrus'), ('guava', 'Guava')], max_length=30)),
                ('status', models.CharField(choices=[('planning', 'Planning'), ('planted', 'Planted'), ('growing', 'Growing'), ('flowering', 'Flowering'), ('fruiting', 'Fruiting'), ('harvesting', 'Harvesting'), ('harvested', 'Harvested'), ('dormant', 'Dormant')], default='planning', max_length=20)),
                ('planting_date', models.DateField(blank=True, null=True)),
                ('expected_harvest_date', models.DateField(blank=True, null=True)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('farm', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='crops', to='farms.farm')),
            ],
            options={
                'ordering': ['farm__name', 'crop_type'],
            },
        ),
    ]
