from django.test import SimpleTestCase

from apps.custom_ads.models import CustomAdOrder
from apps.custom_ads.workflow import workflow_steps


def states(status):
    order = CustomAdOrder(workflow_status=status)
    return [step['status'] for step in workflow_steps(order)]


class WorkflowStepsTest(SimpleTestCase):
    def test_new_order(self):
        self.assertEqual(states('submitted'), ['current'] + ['pending'] * 6)

    def test_proofs_ready(self):
        self.assertEqual(
            states('proofs_ready'),
            ['completed', 'completed', 'completed', 'current', 'pending', 'pending', 'pending'],
        )

    def test_rejected_counts_up_to_client_review(self):
        self.assertEqual(states('rejected'), ['completed'] * 5 + ['pending', 'pending'])

    def test_completed_order(self):
        self.assertEqual(states('completed'), ['completed'] * 7)

    def test_cancelled_order(self):
        self.assertEqual(states('cancelled'), ['pending'] * 7)

    def test_step_names(self):
        names = [step['name'] for step in workflow_steps(CustomAdOrder(workflow_status='approved'))]
        self.assertEqual(names, [
            'Order Submitted', 'In Review', 'Designer Assigned', 'Design Proofs Ready',
            'Under Review', 'Approved', 'Completed',
        ])


class OrderTransitionTableTest(SimpleTestCase):
    def test_terminal_statuses(self):
        for status in ('rejected', 'completed', 'cancelled'):
            self.assertNotIn(status, CustomAdOrder.TRANSITIONS)

    def test_transition_table_only_uses_workflow_statuses(self):
        statuses = set(CustomAdOrder.WorkflowStatus.values)
        for current, targets in CustomAdOrder.TRANSITIONS.items():
            self.assertIn(current, statuses)
            self.assertTrue(set(targets) <= statuses)

    def test_model_exposes_no_status_alias(self):
        self.assertFalse(hasattr(CustomAdOrder, 'S'))
