"""Chat System Prompt — behavioral contract for the local model.

Invariants:
    - build_system_prompt(native_tools=False) teaches the JSON command protocol
      that core/extract_command.py parses
    - build_system_prompt(native_tools=True) points the model at TOOLS_USERS instead
    - build_explain_request(result) is the follow-up turn after an operation

Design Decisions:
    - Examples use the exact operation aliases dispatch accepts
    - Single-line JSON examples: small models copy the shape verbatim
"""

_IDENTITY = (
    "You are an AI assistant with access to a user database. "
    "You can help with CRUD operations on users."
)

_JSON_PROTOCOL = """When the user asks to perform database operations, respond in the following JSON format:
{
  "action": "database_operation",
  "operation": "add_user" | "get_user" | "list_users" | "update_user" | "delete_user",
  "parameters": { /* operation-specific parameters */ }
}

Examples:
- For 'add user named Adam with email adam@test.com':
{"action":"database_operation","operation":"add_user","parameters":{"name":"Adam","email":"adam@test.com"}}

- For 'list all users':
{"action":"database_operation","operation":"list_users","parameters":{}}

- For 'find user with id 1':
{"action":"database_operation","operation":"get_user","parameters":{"id":1}}

- For 'change the email of user 3 to new@test.com':
{"action":"database_operation","operation":"update_user","parameters":{"id":3,"email":"new@test.com"}}

- For 'delete user with id 2':
{"action":"database_operation","operation":"delete_user","parameters":{"id":2}}

After responding with the JSON command, you will receive the result and should explain it to the user in natural language."""

_TOOLS_PROTOCOL = (
    "Use the provided tools (add_user, get_user, list_users, update_user, "
    "delete_user) whenever the user asks to read or change user records. "
    "After a tool result arrives, explain it to the user in natural language. "
    "For anything else, answer conversationally."
)

_EXPLAIN_TEMPLATE = (
    "The database operation returned: {result}. "
    "Please explain this result to the user in natural language."
)


def build_system_prompt(native_tools: bool = False) -> str:
    """System prompt for the selected command protocol."""
    protocol = _TOOLS_PROTOCOL if native_tools else _JSON_PROTOCOL
    return f"{_IDENTITY}\n\n{protocol}"


def build_explain_request(result: str) -> str:
    """User-turn text asking the model to explain an operation result."""
    return _EXPLAIN_TEMPLATE.format(result=result)
