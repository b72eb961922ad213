# segments/tests/test_lifecycle.py

from django.test import SimpleTestCase

from segments.domain import STATUS_DRAFT, STATUS_SAVED, STATUS_VALIDATED
from segments.services.period_lifecycle import (
    InvalidPeriodTransitionError,
    can_transition,
    validate_transition,
)


class PeriodLifecycleTests(SimpleTestCase):
    def test_allowed_transitions(self):
        self.assertTrue(can_transition(from_status=STATUS_DRAFT, to_status=STATUS_VALIDATED))
        self.assertTrue(can_transition(from_status=STATUS_VALIDATED, to_status=STATUS_SAVED))
        self.assertTrue(can_transition(from_status=STATUS_VALIDATED, to_status=STATUS_DRAFT))

    def test_draft_cannot_skip_validation(self):
        self.assertFalse(can_transition(from_status=STATUS_DRAFT, to_status=STATUS_SAVED))

    def test_saved_is_terminal(self):
        for target in (STATUS_DRAFT, STATUS_VALIDATED, STATUS_SAVED):
            with self.subTest(target=target):
                with self.assertRaises(InvalidPeriodTransitionError):
                    validate_transition(from_status=STATUS_SAVED, to_status=target)
