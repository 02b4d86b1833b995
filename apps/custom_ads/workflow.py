from .models import CustomAdOrder

Status = CustomAdOrder.WorkflowStatus

STEPS = (
    (Status.SUBMITTED, 'Order Submitted', 'Your custom ad order has been received'),
    (Status.IN_REVIEW, 'In Review', 'Our team is reviewing your requirements'),
    (Status.DESIGNER_ASSIGNED, 'Designer Assigned', 'A designer has been assigned to your project'),
    (Status.PROOFS_READY, 'Design Proofs Ready', 'Initial designs are ready for your review'),
    (Status.CLIENT_REVIEW, 'Under Review', 'Reviewing your feedback and making revisions'),
    (Status.APPROVED, 'Approved', 'Design approved and ready for production'),
    (Status.COMPLETED, 'Completed', 'Your custom ad is ready to use'),
)

# Position of each status along STEPS. A rejected order has passed every
# step up to client review; cancelled orders sit before the first step.
_POSITION = {status: index for index, (status, _, _) in enumerate(STEPS)}
_POSITION[Status.REJECTED] = _POSITION[Status.APPROVED]
_POSITION[Status.CANCELLED] = -1


def step_state(step_index, order_status):
    step_status = STEPS[step_index][0]
    if order_status == step_status:
        return 'completed' if step_status == Status.COMPLETED else 'current'
    if _POSITION.get(order_status, -1) > step_index:
        return 'completed'
    return 'pending'


def workflow_steps(order):
    """The progress tracker shown to clients for ``order``."""
    steps = []
    for index, (status, name, description) in enumerate(STEPS):
        if status == Status.DESIGNER_ASSIGNED and order.designer_id:
            description = f"{order.designer.display_name} is working on your design"

        completed_at = None
        if status == Status.SUBMITTED:
            completed_at = order.created_at
        elif status == Status.COMPLETED:
            completed_at = order.actual_completion_date

        steps.append({
            'id': status.value,
            'name': name,
            'description': description,
            'status': step_state(index, order.workflow_status),
            'completed_at': completed_at,
        })
    return steps
