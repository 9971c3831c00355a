"""Tests for the event emitter."""
from gphotospy.core.api import PAGING, UPLOAD_PROGRESS, EventEmitter


class TestEventEmitter:

    def test_emit_in_registration_order(self):
        emitter = EventEmitter()
        calls = []
        emitter.on(PAGING, lambda p: calls.append(('first', p)))
        emitter.on(PAGING, lambda p: calls.append(('second', p)))

        count = emitter.emit(PAGING, 1)

        assert count == 2
        assert calls == [('first', 1), ('second', 1)]

    def test_emit_without_listeners(self):
        assert EventEmitter().emit(UPLOAD_PROGRESS, object()) == 0

    def test_off_single_callback(self):
        emitter = EventEmitter()
        kept, removed = [], []
        emitter.on(PAGING, kept.append).on(PAGING, removed.append)

        emitter.off(PAGING, removed.append)
        emitter.emit(PAGING, 'x')

        assert kept == ['x']
        assert removed == []

    def test_off_all(self):
        emitter = EventEmitter()
        emitter.on(PAGING, print)

        emitter.off(PAGING)

        assert emitter.listener_count(PAGING) == 0

    def test_bind(self):
        emitter = EventEmitter()
        seen = []
        emitter.on(UPLOAD_PROGRESS, seen.append)

        callback = emitter.bind(UPLOAD_PROGRESS)
        callback('progress')

        assert seen == ['progress']
