"""
Per-property booking locks
Serializes the check-then-insert of reservations for one property.
"""

import threading
from contextlib import contextmanager

from extensions import db
from app.models.property import Property


_registry_lock = threading.Lock()
_property_locks = {}


def _lock_for(property_id):
    with _registry_lock:
        lock = _property_locks.get(property_id)
        if lock is None:
            lock = _property_locks[property_id] = threading.Lock()
        return lock


@contextmanager
def property_lock(property_id):
    """
    Hold the property for the duration of a booking write.

    An in-process lock covers threads of one worker; the SELECT ... FOR
    UPDATE on the property row covers other workers on databases that
    support row locks (SQLite ignores it). Yields the locked property, or
    None when it does not exist.
    """
    lock = _lock_for(property_id)
    with lock:
        property_obj = (
            Property.query
            .filter(Property.id == property_id)
            .with_for_update()
            .first()
        )
        try:
            yield property_obj
        except Exception:
            db.session.rollback()
            raise
