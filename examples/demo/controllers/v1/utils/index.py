"""/v1/utils/:param1 — an index controller with a GET-only path param."""

from prowl import Controller


class Utils(Controller):
    params = {"get": ["param1"]}
    schema = {
        "params": {
            "get": {
                "type": "object",
                "properties": {
                    "param1": {"type": "string"},
                },
            },
        },
    }

    async def get(self, request):
        return f"very useful data: {request.path_params['param1']}"
