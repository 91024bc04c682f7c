"""Parsing and normalising tool references and names."""

from __future__ import annotations

import json
import re
import shlex
from typing import Any, TypeVar

SUFFIX = ".gpt"

_VALID_TOOL_NAME = re.compile(r"[a-zA-Z0-9]{1,64}")
_INVALID_CHARS = re.compile(r"[^a-zA-Z0-9_]+")

T = TypeVar("T")


class ToolNotFoundError(LookupError):
    """Raised when a referenced tool cannot be found."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"tool not found: {tool_name}")
        self.tool_name = tool_name


class CredentialArgError(ValueError):
    """Raised when a credential reference cannot be parsed."""


def to_tool_name(tool_name: str, sub_tool: str) -> str:
    """Display name of a tool, optionally a sub tool of another."""
    if not sub_tool:
        return tool_name
    return f"{sub_tool} from {tool_name}"


def is_match(sub_tool: str) -> bool:
    """Whether the name is a wildcard pattern."""
    return any(ch in sub_tool for ch in "*?[")


def _index(items: list[str], value: str) -> int:
    try:
        return items.index(value)
    except ValueError:
        return -1


def split_arg(has_arg: str) -> tuple[str, str]:
    """Split a tool string into the tool name and its arguments.

    An alias before ``with`` is discarded; an alias without ``with`` is
    returned as the argument, ``as`` included.
    """
    fields = has_arg.split()
    with_idx = _index(fields, "with")
    as_idx = _index(fields, "as")

    if with_idx == -1:
        if as_idx != -1:
            return " ".join(fields[:as_idx]), " ".join(fields[as_idx:])
        return has_arg.strip(), ""

    if as_idx != -1 and as_idx < with_idx:
        return " ".join(fields[:as_idx]), " ".join(fields[with_idx + 1 :])

    return " ".join(fields[:with_idx]), " ".join(fields[with_idx + 1 :])


def parse_credential_args(
    tool_name: str, input: str
) -> tuple[str, str, dict[str, Any] | None]:
    """Parse ``name [as alias] [with value as arg and ...]``.

    Returns the tool name, the alias and the arguments. Argument values of the
    form ``${key}`` are replaced by ``key`` from the JSON object ``input``.
    """
    if not tool_name:
        return "", "", None

    input_map: dict[str, Any] = {}
    if input:
        # Input may not be JSON at all (chat mode); that is not an error.
        try:
            parsed = json.loads(input)
        except ValueError:
            parsed = None
        if isinstance(parsed, dict):
            input_map = parsed

    try:
        fields = shlex.split(tool_name)
    except ValueError as exc:
        raise CredentialArgError(str(exc)) from exc

    if len(fields) == 1:
        return tool_name, "", None

    original_name, *fields = fields
    alias = ""
    if fields[0] == "as":
        if len(fields) < 2:
            raise CredentialArgError("expected alias after 'as'")
        alias = fields[1]
        fields = fields[2:]

    if not fields:
        return original_name, alias, None

    if fields[0] != "with":
        raise CredentialArgError(f"expected 'with' but got {fields[0]}")
    fields = fields[1:]

    if not fields:
        raise CredentialArgError("expected args after 'with'")

    args: dict[str, Any] = {}
    prev = "none"
    arg_value = ""
    for word in fields:
        if prev in ("none", "and"):
            arg_value = word
            prev = "value"
        elif prev == "value":
            if word != "as":
                raise CredentialArgError(f"expected 'as' but got {word}")
            prev = "as"
        elif prev == "as":
            args[word] = arg_value
            prev = "name"
        elif prev == "name":
            if word != "and":
                raise CredentialArgError(f"expected 'and' but got {word}")
            prev = "and"

    if prev == "and":
        raise CredentialArgError("expected arg name after 'and'")

    for key, value in args.items():
        if value.startswith("${") and value.endswith("}"):
            ref = value[2:-1]
            if ref in input_map:
                resolved = input_map[ref]
                if not isinstance(resolved, str):
                    raise CredentialArgError(f"input value for {ref} is not a string")
                args[key] = resolved

    return original_name, alias, args


def split_tool_ref(target_tool_name: str) -> tuple[str, str]:
    """Split ``sub from tool [with args]`` into the tool and the sub tool."""
    fields = target_tool_name.split()
    idx = _index(fields, "from")
    if idx == -1:
        tool_name, sub_tool = target_tool_name.strip(), ""
    else:
        tool_name, sub_tool = " ".join(fields[idx + 1 :]), " ".join(fields[:idx])
    tool_name, _ = split_arg(tool_name)
    return tool_name, sub_tool


def tool_normalizer(tool: str) -> str:
    """Turn a tool reference into a short camel-case function name."""
    _, sub_tool = split_tool_ref(tool)
    last_tool = sub_tool or tool

    parts = last_tool.split("/")
    tool = parts[-1]
    if parts[-1] == "tool.gpt" and len(parts) > 1 and len(parts[-2]) > 2:
        tool = parts[-2]
    if tool.endswith(SUFFIX):
        tool = tool[: tool.rfind(".")]
    if tool.startswith("sys."):
        tool = tool[len("sys.") :]

    if _VALID_TOOL_NAME.fullmatch(tool):
        return tool

    tool = _INVALID_CHARS.sub("_", tool[:55])

    words = [part.lower() for part in tool.split("_") if part]
    final = "".join(
        words[:1] + [word[:1].upper() + word[1:] for word in words[1:]]
    )
    return final or "tool"


def pick_tool_name(tool_name: str, existing: set[str]) -> str:
    """Normalise ``tool_name`` to a name not in ``existing`` and record it."""
    test_name = tool_normalizer(tool_name or "external")
    while test_name in existing:
        test_name += "0"
    existing.add(test_name)
    return test_name


def first_set(*args: T) -> T | None:
    """The first argument that is not a zero value."""
    for value in args:
        if value:
            return value
    return args[-1] if args else None