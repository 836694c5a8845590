"""GET /v1/utils/protected_route — registered in the ``secured`` scope."""

from prowl import SecureController

_TOKEN = "Bearer 1234567890"


class ProtectedRoute(SecureController):
    def authorize(self, request):
        return request.headers.get("authorization") == _TOKEN

    async def get(self, request):
        return "wont see this unless you provide a valid token"
