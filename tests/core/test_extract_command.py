"""Command Extraction — finding the database command in model replies.

Tests cover:
    - Bare JSON command with nested parameters
    - Command embedded in prose and in a ```json fence
    - Missing parameters defaults to {}
    - Plain chat, other actions and malformed JSON return None
    - Unknown operation names still extracted (dispatch reports them)
"""

from userchat.core.extract_command import extract_command


def test_extracts_bare_command_with_parameters():
    text = (
        '{"action":"database_operation","operation":"add_user",'
        '"parameters":{"name":"Adam","email":"adam@test.com"}}'
    )
    cmd = extract_command(text)
    assert cmd is not None
    assert cmd.operation == "add_user"
    assert cmd.parameters == {"name": "Adam", "email": "adam@test.com"}


def test_extracts_command_inside_prose():
    text = (
        "Sure, let me look that up.\n"
        '{"action": "database_operation", "operation": "get_user", '
        '"parameters": {"id": 1}}\n'
        "One moment!"
    )
    cmd = extract_command(text)
    assert cmd.operation == "get_user"
    assert cmd.parameters == {"id": 1}


def test_extracts_command_from_markdown_fence():
    text = (
        "```json\n"
        '{"action":"database_operation","operation":"list_users","parameters":{}}\n'
        "```"
    )
    cmd = extract_command(text)
    assert cmd.operation == "list_users"
    assert cmd.parameters == {}


def test_missing_parameters_default_to_empty():
    cmd = extract_command('{"action":"database_operation","operation":"list_users"}')
    assert cmd.parameters == {}


def test_null_parameters_default_to_empty():
    cmd = extract_command(
        '{"action":"database_operation","operation":"list_users","parameters":null}'
    )
    assert cmd.parameters == {}


def test_plain_chat_returns_none():
    assert extract_command("Hello! How can I help you today?") is None


def test_empty_text_returns_none():
    assert extract_command("") is None


def test_other_action_returns_none():
    text = '{"action":"chat","operation":"database_operation"}'
    assert extract_command(text) is None


def test_malformed_json_returns_none():
    text = '{"action":"database_operation","operation":"add_user",'
    assert extract_command(text) is None


def test_missing_operation_returns_none():
    assert extract_command('{"action":"database_operation"}') is None


def test_unknown_operation_is_still_extracted():
    cmd = extract_command(
        '{"action":"database_operation","operation":"foo_bar","parameters":{}}'
    )
    assert cmd.operation == "foo_bar"


def test_first_command_wins():
    text = (
        '{"action":"database_operation","operation":"get_user","parameters":{"id":1}} '
        '{"action":"database_operation","operation":"delete_user","parameters":{"id":1}}'
    )
    assert extract_command(text).operation == "get_user"
