"""Hidden directories are never scanned; this file defines no handlers."""

from prowl import Controller


class Unfinished(Controller):
    schema = {"body": {"type": "object"}}
