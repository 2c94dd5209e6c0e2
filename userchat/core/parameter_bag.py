"""Parameter Bag — typed, read-only access to loosely-typed operation parameters.

Invariants:
    - Values are str or int; None values are treated as absent keys
    - Accessors never raise on absence: they return None
    - get_int accepts integral strings ("3", " 3 ") and integral floats (3.0)
    - bool is never an int here (JSON true/false are rejected for ids)

Design Decisions:
    - Coercion happens once in from_mapping: model output often quotes ids
      or emits 3.0 — handlers see only str | int
"""

from collections.abc import Mapping

from userchat.core.domain_types import ParamValue
from userchat.core.errors import OperationValidationError


def _coerce(value: object) -> ParamValue | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        return value
    return str(value)


class ParameterBag:
    """Immutable str | int mapping with optional-field accessors."""

    def __init__(self, values: Mapping[str, ParamValue] | None = None):
        self._values: dict[str, ParamValue] = dict(values or {})

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object] | None) -> "ParameterBag":
        """Build from raw decoded JSON. Drops None, normalizes scalars."""
        values: dict[str, ParamValue] = {}
        for key, value in (raw or {}).items():
            coerced = _coerce(value)
            if coerced is not None:
                values[str(key)] = coerced
        return cls(values)

    def get_text(self, key: str) -> str | None:
        """Return the value as text, or None when absent."""
        value = self._values.get(key)
        if value is None:
            return None
        return str(value)

    def get_int(self, key: str) -> int | None:
        """Return the value as int, or None when absent.

        Raises OperationValidationError when present but not integral.
        """
        value = self._values.get(key)
        if value is None:
            return None
        if isinstance(value, int):
            return value
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            raise OperationValidationError(
                f"'{key}' must be an integer, got '{value}'", field=key,
            )

    def __repr__(self) -> str:
        return f"ParameterBag({self._values!r})"
