import strawberry
import strawberry_django
from strawberry import auto
from apps.coupons.models import Coupon
from apps.coupons.services import status_label

@strawberry_django.type(Coupon)
class CouponType:
    id: auto
    code: auto
    type: auto
    value: auto
    max_uses: auto
    current_uses: auto
    valid_until: auto
    is_active: auto

    @strawberry.field
    def status_label(self) -> str:
        return status_label(self)
