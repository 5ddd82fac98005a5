"""
BulkChange: collapse many mutations of one object into a single save.

    with BulkChange(team):
        team.set_description("...")
        team.views_property.primary_view_name = "view2"
    # saved once here

While the block runs, ``BulkChange.contains(team)`` is true and the object's
``save()`` is expected to return early. Leaving the block normally commits
(calls ``save()``); leaving it with an exception aborts without saving.
Scopes are per thread and may be nested.
"""

import threading

_local = threading.local()


def _active():
    if not hasattr(_local, "stack"):
        _local.stack = []
    return _local.stack


class BulkChange:
    def __init__(self, saveable):
        self.saveable = saveable
        self._completed = False

    def __enter__(self):
        _active().append(self)
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.commit()
        else:
            self.abort()
        return False

    def _pop(self):
        stack = _active()
        if self in stack:
            stack.remove(self)

    def commit(self):
        if self._completed:
            return
        self._completed = True
        self._pop()
        self.saveable.save()

    def abort(self):
        if self._completed:
            return
        self._completed = True
        self._pop()

    @staticmethod
    def contains(saveable) -> bool:
        return any(b.saveable is saveable for b in _active())
