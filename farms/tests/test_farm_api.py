from datetime import date
from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework.test import APITestCase

from farms.models import Farm, Crop

User = get_user_model()


class FarmApiTest(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(username='awa', password='password')
        self.client.force_authenticate(self.user)

    def test_create_farm_sets_owner(self):
        response = self.client.post(
            reverse('farm-list'),
            {'name': 'Bobo Orchard', 'country': 'burkina_faso', 'size_hectares': '12.50'},
            format='json',
        )
        self.assertEqual(response.status_code, 201)
        farm = Farm.objects.get(pk=response.data['id'])
        self.assertEqual(farm.owner, self.user)

    def test_unknown_country_is_rejected_with_field_details(self):
        response = self.client.post(reverse('farm-list'), {'name': 'Nowhere', 'country': 'atlantis'}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'Validation error')
        self.assertIn('country', [d['field'] for d in response.data['details']])

    def test_missing_farm_returns_not_found(self):
        response = self.client.get(reverse('farm-detail', args=[9999]))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data['error'], 'Farm not found')

    def test_anonymous_requests_are_rejected(self):
        self.client.force_authenticate(None)
        response = self.client.get(reverse('farm-list'))
        self.assertEqual(response.status_code, 401)


class CropApiTest(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(username='moussa', password='password')
        self.client.force_authenticate(self.user)
        self.farm = Farm.objects.create(name='Sikasso Plot', country='mali')
        self.other_farm = Farm.objects.create(name='Niamey Garden', country='niger')
        Crop.objects.create(farm=self.other_farm, crop_type='onion')

    def test_harvest_before_planting_is_rejected(self):
        response = self.client.post(reverse('crop-list'), {
            'farm': self.farm.id,
            'crop_type': 'mango',
            'planting_date': '2026-06-01',
            'expected_harvest_date': '2026-05-01',
        }, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('expected_harvest_date', [d['field'] for d in response.data['details']])

    def test_filter_crops_by_farm(self):
        Crop.objects.create(farm=self.farm, crop_type='cashew', planting_date=date(2026, 3, 1))
        response = self.client.get(reverse('crop-list'), {'farm': self.farm.id})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['crop_type'], 'cashew')
