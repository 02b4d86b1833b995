import strawberry
from strawberry.types import Info
from typing import List, Optional
from apps.coupons.services import list_coupons
from .types import CouponType

@strawberry.type
class CouponQueries:

    @strawberry.field
    def coupons(self, info: Info, status: Optional[str] = None) -> List[CouponType]:
        user = info.context.request.user
        if not (user.is_authenticated and user.is_platform_admin):
            return []
        return list_coupons(status=status)
