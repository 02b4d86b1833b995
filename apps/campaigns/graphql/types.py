import strawberry
import strawberry_django
from datetime import datetime
from strawberry import auto
from apps.campaigns.models import Campaign

@strawberry_django.type(Campaign)
class CampaignType:
    id: auto
    name: auto
    budget: auto
    status: auto
    start_date: auto
    end_date: auto
    rejection_reason: auto

@strawberry.type
class PendingItemType:
    kind: str
    id: int
    title: str
    status: str
    owner_email: str
    created_at: datetime
