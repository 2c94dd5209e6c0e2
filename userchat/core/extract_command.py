"""Command Extraction — locate a database command object inside model text.

Invariants:
    - Returns the FIRST JSON object whose action == "database_operation"
    - Nested objects (parameters) are decoded with their parent, never split
    - Prose, markdown fences and trailing text around the object are ignored
    - Never raises: malformed candidates are skipped, absence returns None
"""

import json

from pydantic import ValidationError

from userchat.schemas.command import DatabaseCommand

_DECODER = json.JSONDecoder()
_MARKER = "database_operation"


def extract_command(text: str) -> DatabaseCommand | None:
    """Find and validate the first database command in a model reply."""
    if not text or _MARKER not in text:
        return None

    start = text.find("{")
    while start != -1:
        try:
            obj, _ = _DECODER.raw_decode(text, start)
        except json.JSONDecodeError:
            obj = None
        if isinstance(obj, dict) and obj.get("action") == _MARKER:
            try:
                return DatabaseCommand.model_validate(obj)
            except ValidationError:
                return None
        start = text.find("{", start + 1)
    return None
