"""Tool argument validation.

Arguments are validated against the tool's pydantic input model before the
tool runs. Defaults for omitted optional fields come from the model.
Validation is pure: it never touches the remote API.
"""

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from nmcp_tools.errors import ToolValidationError

M = TypeVar("M", bound=BaseModel)

# pydantic error type -> JSON type name
_EXPECTED_TYPES = {
    "string_type": "string",
    "int_type": "integer",
    "float_type": "number",
    "bool_type": "boolean",
    "dict_type": "object",
    "model_type": "object",
    "model_attributes_type": "object",
    "list_type": "array",
}

_JSON_TYPE_NAMES = {
    type(None): "null",
    bool: "boolean",
    int: "integer",
    float: "number",
    str: "string",
    list: "array",
    dict: "object",
}


def _json_type_name(value: Any) -> str:
    for py_type, json_name in _JSON_TYPE_NAMES.items():
        if type(value) is py_type:
            return json_name
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _format_location(loc: tuple[Any, ...]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "arguments"


def describe_error(error: dict[str, Any]) -> str:
    """Render one pydantic error as `<field>: <problem>`."""
    location = _format_location(error.get("loc", ()))
    error_type = error.get("type", "")

    if error_type == "missing":
        return f"{location}: field required"

    if error_type in _EXPECTED_TYPES:
        actual = _json_type_name(error.get("input"))
        return f"{location}: expected {_EXPECTED_TYPES[error_type]}, got {actual}"

    if error_type in ("literal_error", "enum"):
        # pydantic renders "'a', 'b' or 'c'"
        expected = (error.get("ctx") or {}).get("expected", "").replace(" or ", ", ")
        return f"{location}: must be one of {expected}"

    return f"{location}: {error.get('msg', 'invalid value')}"


def validate_arguments(model: type[M], arguments: Any) -> M:
    """Validate raw tool arguments against an input model.

    Args:
        model: Pydantic input model of the tool
        arguments: Raw arguments from the tool call (None means no arguments)

    Returns:
        Validated model instance with defaults applied

    Raises:
        ToolValidationError: One or more constraints were violated
    """
    if arguments is None:
        arguments = {}

    if not isinstance(arguments, Mapping):
        raise ToolValidationError(
            [f"arguments: expected object, got {_json_type_name(arguments)}"]
        )

    try:
        return model.model_validate(dict(arguments))
    except PydanticValidationError as e:
        raise ToolValidationError([describe_error(err) for err in e.errors()]) from e
