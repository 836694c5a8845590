"""GET /v1/utils/health_check."""

from prowl import Controller


class HealthCheck(Controller):
    async def get(self, request):
        return {"status": "ok"}
