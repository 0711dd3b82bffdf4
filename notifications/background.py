# notifications/background.py
"""
Fire-and-forget execution for pushes triggered by API requests.

Work runs on a small process-wide thread pool so the request that caused it
returns without waiting on push services. Each job closes the database
connections its worker thread opened.
"""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait

from django.conf import settings
from django.db import connections

logger = logging.getLogger(__name__)

_executor = None
_pending = set()
_lock = threading.Lock()


def get_executor():
    global _executor
    with _lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(
                max_workers=settings.NOTIFICATIONS_BACKGROUND_WORKERS,
                thread_name_prefix='notifications',
            )
        return _executor


def _discard(future):
    with _lock:
        _pending.discard(future)


def run_in_background(fn, *args, **kwargs):
    """Schedules fn(*args, **kwargs) and returns its Future. Errors are logged, never raised."""
    def job():
        try:
            fn(*args, **kwargs)
        except Exception:
            logger.exception("Background notification job %s failed", getattr(fn, '__name__', fn))
        finally:
            connections.close_all()

    future = get_executor().submit(job)
    with _lock:
        _pending.add(future)
    future.add_done_callback(_discard)
    return future


def wait_for_background(timeout=None):
    """Blocks until every scheduled job has finished or `timeout` seconds pass."""
    with _lock:
        pending = list(_pending)
    done, not_done = wait(pending, timeout=timeout)
    return not not_done
