"""Domain Types — verifies identity types, enums and alias resolution.

Tests:
    - UserId wraps int
    - Every alias resolves to its canonical Operation
    - Resolution is case-insensitive and whitespace-tolerant
    - Unknown names resolve to None
"""

import pytest

from userchat.core.domain_types import (
    UserId, Operation, ChatRole, OPERATION_ALIASES, resolve_operation,
)


def test_user_id_wraps_int():
    assert UserId(7) == 7


def test_operation_has_five_members():
    assert set(Operation) == {
        Operation.ADD, Operation.GET, Operation.LIST,
        Operation.UPDATE, Operation.DELETE,
    }


@pytest.mark.parametrize("name, expected", [
    ("add_user", Operation.ADD),
    ("create_user", Operation.ADD),
    ("get_user", Operation.GET),
    ("find_user", Operation.GET),
    ("list_users", Operation.LIST),
    ("get_all_users", Operation.LIST),
    ("update_user", Operation.UPDATE),
    ("delete_user", Operation.DELETE),
])
def test_aliases_resolve_to_canonical_operation(name, expected):
    assert resolve_operation(name) is expected


def test_resolution_ignores_case_and_padding():
    assert resolve_operation("ADD_User") is Operation.ADD
    assert resolve_operation("  list_users ") is Operation.LIST


def test_unknown_name_resolves_to_none():
    assert resolve_operation("foo_bar") is None
    assert resolve_operation("") is None
    assert resolve_operation("add") is None


def test_alias_table_has_eight_names():
    assert len(OPERATION_ALIASES) == 8


def test_chat_roles_match_messages_api():
    assert ChatRole.USER.value == "user"
    assert ChatRole.ASSISTANT.value == "assistant"
