from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken
from strawberry.django.views import GraphQLView


class JWTGraphQLView(GraphQLView):
    """GraphQL endpoint that accepts the same Bearer tokens as the REST API."""

    def dispatch(self, request, *args, **kwargs):
        auth = JWTAuthentication()
        try:
            result = auth.authenticate(request)
        except (InvalidToken, AuthenticationFailed):
            # Resolvers see an anonymous user and return nothing private
            result = None
        if result is not None:
            request.user = result[0]
        return super().dispatch(request, *args, **kwargs)
