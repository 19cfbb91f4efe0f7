from django.test import SimpleTestCase

from ledger.exceptions import ReentrancyError
from ledger.guards import non_reentrant, operation_in_progress


class NonReentrantTests(SimpleTestCase):
    def test_nested_guarded_call_is_rejected(self):
        calls = []

        @non_reentrant
        def inner():
            calls.append('inner')

        @non_reentrant
        def outer():
            calls.append('outer')
            inner()

        with self.assertRaises(ReentrancyError):
            outer()
        self.assertEqual(calls, ['outer'])
        self.assertFalse(operation_in_progress())

    def test_guard_released_after_failure(self):
        @non_reentrant
        def failing():
            raise ValueError('boom')

        with self.assertRaises(ValueError):
            failing()

        @non_reentrant
        def ok():
            return operation_in_progress()

        self.assertTrue(ok())
