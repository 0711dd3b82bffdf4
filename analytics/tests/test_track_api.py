from django.apps import apps
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from analytics.queue import EventQueue
from .test_queue import RecordingTransport


@override_settings(ANALYTICS_ENABLED=True)
class TrackEventApiTest(APITestCase):
    def setUp(self):
        self.url = reverse('analytics:track')
        self.transport = RecordingTransport()
        config = apps.get_app_config('analytics')
        original = config.event_queue
        config.event_queue = EventQueue(self.transport, max_pending=10, batch_size=2)
        self.addCleanup(setattr, config, 'event_queue', original)
        self.queue = config.event_queue

    def test_single_event_is_enriched(self):
        response = self.client.post(self.url, {'event_type': 'page_view', 'page': '/dashboard'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(response.data, {'accepted': 1, 'queued': 1})
        self.assertEqual(len(self.queue), 1)

    def test_full_batch_is_flushed(self):
        events = [{'event_type': 'crop_created'}, {'event_type': 'farm_viewed', 'properties': {'farm_id': 3}}]
        response = self.client.post(self.url, {'events': events}, format='json')

        self.assertEqual(response.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(len(self.transport.batches), 1)
        sent = self.transport.batches[0]
        self.assertEqual(sent[0]['namespace'], 'fructosahel')
        self.assertIn('timestamp', sent[0])
        self.assertIsNone(sent[0]['user_id'])
        self.assertEqual(sent[1]['properties'], {'farm_id': 3})

    def test_missing_event_type(self):
        response = self.client.post(self.url, {'page': '/dashboard'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['details'][0]['field'], 'event_type')

    @override_settings(ANALYTICS_ENABLED=False)
    def test_disabled_accepts_and_discards(self):
        response = self.client.post(self.url, {'event_type': 'page_view'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(response.data['queued'], 0)
        self.assertEqual(len(self.queue), 0)

    def test_queue_smaller_than_a_batch_still_delivers(self):
        config = apps.get_app_config('analytics')
        config.event_queue = EventQueue(self.transport, max_pending=2, batch_size=5)
        events = [{'event_type': 'page_view', 'page': f'/farms/{n}'} for n in range(5)]

        response = self.client.post(self.url, {'events': events}, format='json')

        self.assertEqual(response.data, {'accepted': 5, 'queued': 5})
        self.assertEqual(config.event_queue.dropped, 0)
        self.assertEqual([len(batch) for batch in self.transport.batches], [2, 2])
        self.assertEqual(len(config.event_queue), 1)
