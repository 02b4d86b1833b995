import strawberry
from strawberry.types import Info
from typing import List, Optional
from django.db.models import Q
from apps.custom_ads.models import CustomAdOrder
from .types import CustomAdOrderType

@strawberry.type
class CustomAdQueries:

    @strawberry.field
    def custom_ad_orders(self, info: Info, status: Optional[str] = None) -> List[CustomAdOrderType]:
        user = info.context.request.user
        if not user.is_authenticated:
            return []
        orders = CustomAdOrder.objects.select_related('designer')
        if not user.is_platform_admin:
            orders = orders.filter(Q(user=user) | Q(designer=user))
        if status:
            orders = orders.filter(workflow_status=status)
        return orders
