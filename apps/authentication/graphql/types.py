import strawberry_django
from strawberry import auto
from apps.authentication.models import User

@strawberry_django.type(User)
class UserType:
    id: auto
    email: auto
    full_name: auto
    role: auto
    company_name: auto
    subscription_tier: auto
    date_joined: auto
