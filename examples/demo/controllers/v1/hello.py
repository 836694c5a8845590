"""/v1/hello — one controller, three methods, one shared schema.

GET gets its own response schema and no body; PUT and POST share the
generic body and the 200 response.
"""

from prowl import Controller


class Hello(Controller):
    schema = {
        "body": {
            "type": "object",
            "properties": {
                "hello": {"type": "string"},
            },
        },
        "querystring": {
            "type": "object",
            "required": ["hello"],
            "properties": {
                "hello": {"type": "string"},
            },
        },
        "response": {
            "get": {
                200: {
                    "type": "object",
                    "required": ["hithere", "hey"],
                    "properties": {
                        "hithere": {"type": "string"},
                        "hey": {"type": "string"},
                    },
                },
            },
            200: {
                "type": "object",
                "required": ["hi", "hey"],
                "properties": {
                    "hi": {"type": "string"},
                    "hey": {"type": "string"},
                },
            },
        },
    }

    async def get(self, request):
        return {"hithere": request.query.get("hello"), "hey": "yo"}

    async def put(self, request):
        return {"hi": "there", "hey": "yo"}

    async def post(self, request):
        return {"hi": "there", "hey": "yo"}
