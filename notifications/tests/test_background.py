import threading
from unittest import mock

from django.test import SimpleTestCase

from notifications.background import run_in_background, wait_for_background


class RunInBackgroundTest(SimpleTestCase):

    def test_runs_off_the_calling_thread(self):
        seen = []
        future = run_in_background(lambda: seen.append(threading.current_thread().name))
        future.result(timeout=5)
        self.assertEqual(len(seen), 1)
        self.assertNotEqual(seen[0], threading.current_thread().name)
        self.assertTrue(seen[0].startswith('notifications'))

    def test_returns_before_the_job_finishes(self):
        release = threading.Event()
        future = run_in_background(release.wait, 5)
        self.assertFalse(future.done())
        release.set()
        self.assertTrue(wait_for_background(timeout=5))
        self.assertTrue(future.done())

    def test_errors_are_logged_not_raised(self):
        def broken():
            raise RuntimeError("push service down")

        with self.assertLogs('notifications.background', level='ERROR') as logs:
            future = run_in_background(broken)
            self.assertIsNone(future.result(timeout=5))
        self.assertIn('push service down', logs.output[0])

    @mock.patch('notifications.background.connections')
    def test_worker_closes_its_connections(self, connections):
        run_in_background(lambda: None).result(timeout=5)
        connections.close_all.assert_called_once_with()
