"""In-process notifications for exam order changes.

Subscribers are called with ``(order, created)`` after every order save,
once the surrounding transaction commits. A subscriber that raises is logged
and skipped; it never breaks the save that triggered it.
"""
import logging
import threading

from django.db import transaction

logger = logging.getLogger(__name__)

_subscribers = []
_lock = threading.Lock()


def subscribe(callback):
    with _lock:
        if callback not in _subscribers:
            _subscribers.append(callback)
    return callback


def unsubscribe(callback):
    with _lock:
        if callback in _subscribers:
            _subscribers.remove(callback)


def _dispatch(order, created):
    with _lock:
        callbacks = list(_subscribers)
    for callback in callbacks:
        try:
            callback(order, created)
        except Exception:
            logger.exception('Order change subscriber %r failed for order %s', callback, order.pk)


def publish(order, created=False):
    transaction.on_commit(lambda: _dispatch(order, created))
