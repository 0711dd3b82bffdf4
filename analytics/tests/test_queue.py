import threading
import time
from unittest import mock

import requests
from django.test import SimpleTestCase

from analytics.queue import EventQueue, HttpTransport, AnalyticsTransportError, DROP_OLDEST, BLOCK


class RecordingTransport:
    def __init__(self, fail_batches=()):
        self.batches = []
        self.fail_batches = set(fail_batches)

    def send(self, events):
        index = len(self.batches)
        self.batches.append(list(events))
        if index in self.fail_batches:
            raise AnalyticsTransportError("503 Service Unavailable")


class EventQueueTest(SimpleTestCase):

    def test_flush_sends_in_batches(self):
        transport = RecordingTransport()
        queue = EventQueue(transport, max_pending=10, batch_size=3)
        for n in range(7):
            queue.put({'n': n})

        self.assertEqual(queue.flush(), 7)
        self.assertEqual([len(batch) for batch in transport.batches], [3, 3, 1])
        self.assertEqual(len(queue), 0)

    def test_failed_batch_is_discarded(self):
        transport = RecordingTransport(fail_batches={0})
        queue = EventQueue(transport, max_pending=10, batch_size=2)
        for n in range(4):
            queue.put({'n': n})

        self.assertEqual(queue.flush(), 2)
        self.assertEqual(len(queue), 0)

    def test_drop_oldest_when_full(self):
        transport = RecordingTransport()
        queue = EventQueue(transport, max_pending=3, batch_size=10, policy=DROP_OLDEST)
        for n in range(5):
            self.assertTrue(queue.put({'n': n}))

        self.assertEqual(queue.dropped, 2)
        queue.flush()
        self.assertEqual(transport.batches, [[{'n': 2}, {'n': 3}, {'n': 4}]])

    def test_block_rejects_after_timeout(self):
        queue = EventQueue(RecordingTransport(), max_pending=1, policy=BLOCK, block_timeout=0.05)
        self.assertTrue(queue.put({'n': 0}))
        self.assertFalse(queue.put({'n': 1}))
        self.assertEqual(queue.dropped, 1)
        self.assertEqual(len(queue), 1)

    def test_block_waits_for_flush(self):
        transport = RecordingTransport()
        queue = EventQueue(transport, max_pending=1, batch_size=1, policy=BLOCK, block_timeout=5)
        queue.put({'n': 0})

        def flush_later():
            time.sleep(0.05)
            queue.flush()

        flusher = threading.Thread(target=flush_later)
        flusher.start()
        self.assertTrue(queue.put({'n': 1}))
        flusher.join()
        self.assertEqual(queue.dropped, 0)

    def test_full_queue_is_ready_when_smaller_than_a_batch(self):
        transport = RecordingTransport()
        queue = EventQueue(transport, max_pending=3, batch_size=5)
        for n in range(10):
            queue.put({'n': n})
            if queue.batch_ready:
                queue.flush()

        self.assertEqual(queue.dropped, 0)
        self.assertEqual([len(batch) for batch in transport.batches], [3, 3, 3])
        self.assertEqual(len(queue), 1)

    def test_unknown_policy(self):
        with self.assertRaises(ValueError):
            EventQueue(RecordingTransport(), policy='spill_to_disk')


class HttpTransportTest(SimpleTestCase):

    @mock.patch('analytics.queue.requests.post')
    def test_posts_api_key_and_events(self, post):
        HttpTransport('https://analytics.example.com/api', 'proj_key').send([{'event_type': 'page_view'}])
        post.assert_called_once_with(
            'https://analytics.example.com/api',
            json={'apiKey': 'proj_key', 'events': [{'event_type': 'page_view'}]},
            timeout=5,
        )

    @mock.patch('analytics.queue.requests.post', side_effect=requests.Timeout("timed out"))
    def test_network_error(self, post):
        with self.assertRaises(AnalyticsTransportError):
            HttpTransport('https://analytics.example.com/api', 'proj_key').send([])
