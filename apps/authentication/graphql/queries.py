import strawberry
from strawberry.types import Info
from typing import Optional
from .types import UserType

@strawberry.type
class AuthQueries:

    @strawberry.field
    def me(self, info: Info) -> Optional[UserType]:
        user = info.context.request.user
        return user if user.is_authenticated else None
