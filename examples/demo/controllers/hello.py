"""GET /hello — the smallest useful controller."""

from prowl import Controller


class Hello(Controller):
    schema = {
        "response": {
            200: {
                "type": "object",
                "properties": {
                    "hi": {"type": "string"},
                    "hey": {"type": "string"},
                },
            },
        },
    }

    async def get(self, request):
        return {"hi": "there", "hey": "yo"}
