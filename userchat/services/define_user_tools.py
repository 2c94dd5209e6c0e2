"""User Tool Schemas — Anthropic Tool Use format for the five CRUD operations.

Invariants:
    - Tool names are the primary operation aliases (add_user, get_user, ...)
    - Required fields mirror handler validation: add needs name+email,
      update and delete need id, get and list need nothing

Design Decisions:
    - get_user has no required field in schema: "id or name" is enforced by
      the handler, which returns a readable error the model can relay
"""

TOOLS_USERS = [
    {
        "name": "add_user",
        "description": "Add a new user to the database.",
        "input_schema": {
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "The user's name"},
                "email": {
                    "type": "string",
                    "description": "The user's email address",
                },
            },
            "required": ["name", "email"],
        },
    },
    {
        "name": "get_user",
        "description": "Get a user by ID or by name (partial match).",
        "input_schema": {
            "type": "object",
            "properties": {
                "id": {"type": "integer", "description": "The user's ID"},
                "name": {
                    "type": "string",
                    "description": "The user's name (partial match)",
                },
            },
            "required": [],
        },
    },
    {
        "name": "list_users",
        "description": "List all users in the database.",
        "input_schema": {
            "type": "object",
            "properties": {},
            "required": [],
        },
    },
    {
        "name": "update_user",
        "description": "Update a user's name and/or email.",
        "input_schema": {
            "type": "object",
            "properties": {
                "id": {"type": "integer", "description": "The user's ID"},
                "name": {"type": "string", "description": "New name (optional)"},
                "email": {
                    "type": "string",
                    "description": "New email (optional)",
                },
            },
            "required": ["id"],
        },
    },
    {
        "name": "delete_user",
        "description": "Delete a user from the database.",
        "input_schema": {
            "type": "object",
            "properties": {
                "id": {
                    "type": "integer",
                    "description": "The user's ID to delete",
                },
            },
            "required": ["id"],
        },
    },
]
