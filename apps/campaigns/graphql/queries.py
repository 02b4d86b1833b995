import strawberry
from strawberry.types import Info
from typing import List, Optional
from apps.campaigns import review
from apps.campaigns.models import Campaign
from .types import CampaignType, PendingItemType

def _require_admin(info: Info):
    user = info.context.request.user
    if not (user.is_authenticated and user.is_platform_admin):
        raise PermissionError("Admin access required")
    return user

@strawberry.type
class CampaignQueries:

    @strawberry.field
    def review_queue(self, info: Info, kind: Optional[str] = None) -> List[PendingItemType]:
        _require_admin(info)
        return [
            PendingItemType(
                kind=item['kind'],
                id=item['id'],
                title=item['title'],
                status=item['status'],
                owner_email=item['owner_email'],
                created_at=item['created_at'],
            )
            for item in review.all_pending(kind)
        ]

    @strawberry.field
    def campaigns(self, info: Info) -> List[CampaignType]:
        user = info.context.request.user
        if not user.is_authenticated:
            return []
        if user.is_platform_admin:
            return Campaign.objects.all()
        return Campaign.objects.filter(user=user)
