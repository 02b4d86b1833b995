import strawberry
import strawberry_django
from datetime import datetime
from typing import List, Optional
from strawberry import auto
from apps.custom_ads.models import CustomAdOrder
from apps.custom_ads.workflow import workflow_steps

@strawberry.type
class WorkflowStepType:
    id: str
    name: str
    description: str
    status: str
    completed_at: Optional[datetime] = None

@strawberry_django.type(CustomAdOrder)
class CustomAdOrderType:
    id: auto
    service_key: auto
    workflow_status: auto
    payment_status: auto
    priority: auto
    total_amount: auto
    created_at: auto

    @strawberry.field
    def workflow_steps(self) -> List[WorkflowStepType]:
        return [WorkflowStepType(**step) for step in workflow_steps(self)]
