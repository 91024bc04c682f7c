"""Resolving which tools a tool can reach: completions, context, filters, agents and credentials."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Iterator, Sequence

from gptscript.completion import CompletionFunctionDefinition, CompletionTool
from gptscript.names import pick_tool_name, tool_normalizer
from gptscript.schema import object_schema
from gptscript.tool import Program, Tool, ToolReference, ToolType

_log = logging.getLogger(__name__)

DEFAULT_TOOL_SCHEMA: dict[str, Any] = object_schema()
DEFAULT_CHAT_SCHEMA: dict[str, Any] = object_schema()

_DEFAULT_COMPLETION_TYPES = (ToolType.DEFAULT, ToolType.TOOL)


@dataclass
class ToolRefSet:
    """Tool references without duplicates, kept in insertion order.

    Two references are the same when their name, tool id and argument match.
    """

    _refs: dict[tuple[str, str, str], ToolReference] = field(default_factory=dict)

    def add(self, value: ToolReference) -> None:
        """Add a reference unless an equal one is already present."""
        key = (value.named, value.tool_id, value.arg)
        self._refs.setdefault(key, value)

    def add_all(self, values: Iterable[ToolReference]) -> None:
        """Add every reference in ``values``."""
        for value in values:
            self.add(value)

    def has_tool(self, tool_id: str) -> bool:
        """Whether any reference points at ``tool_id``."""
        return any(ref.tool_id == tool_id for ref in self._refs.values())

    def to_list(self) -> list[ToolReference]:
        """The references in the order they were first added."""
        return list(self._refs.values())

    def __iter__(self) -> Iterator[ToolReference]:
        return iter(self._refs.values())

    def __len__(self) -> int:
        return len(self._refs)


def _lookup(prg: Program, tool_id: str) -> Tool:
    return prg.tool_set.get(tool_id) or Tool()


def _exported_context(tool: Tool, prg: Program) -> list[ToolReference]:
    result = ToolRefSet()
    for ref in tool.get_tool_refs_from_names(tool.export_context):
        result.add(ref)
        result.add_all(_exported_context(_lookup(prg, ref.tool_id), prg))
    return result.to_list()


def _exported_tools(tool: Tool, prg: Program) -> list[ToolReference]:
    result = ToolRefSet()
    for ref in tool.get_tool_refs_from_names(tool.export):
        result.add(ref)
        result.add_all(_exported_tools(_lookup(prg, ref.tool_id), prg))
    return result.to_list()


def _direct_context_refs(tool: Tool, prg: Program) -> list[ToolReference]:
    result = ToolRefSet()
    for ref in tool.get_tool_refs_from_names(tool.context):
        result.add_all(_exported_context(_lookup(prg, ref.tool_id), prg))
        result.add(ref)
    return result.to_list()


def _add_referenced_tools(tool: Tool, prg: Program, result: ToolRefSet) -> None:
    for ref in tool.get_tool_refs_from_names(tool.tools):
        result.add(ref)
        result.add_all(_exported_tools(_lookup(prg, ref.tool_id), prg))


def _add_context_exported_tools(tool: Tool, prg: Program, result: ToolRefSet) -> None:
    for ref in _direct_context_refs(tool, prg):
        result.add_all(_exported_tools(_lookup(prg, ref.tool_id), prg))


def _filter_refs(
    prg: Program, refs: Iterable[ToolReference], types: Sequence[ToolType]
) -> list[ToolReference]:
    return [ref for ref in refs if _lookup(prg, ref.tool_id).type in types]


def _completion_tool_refs(
    tool: Tool,
    prg: Program,
    agent_group: Iterable[ToolReference] | None,
    *types: ToolType,
) -> list[ToolReference]:
    if not types:
        types = _DEFAULT_COMPLETION_TYPES

    result = ToolRefSet()
    if tool.chat:
        for agent in agent_group or ():
            if agent.tool_id != tool.id:
                result.add(agent)

    _add_referenced_tools(tool, prg, result)
    _add_context_exported_tools(tool, prg, result)
    return _filter_refs(prg, result, types)


def _add_agents(tool: Tool, prg: Program, result: ToolRefSet) -> None:
    for ref in get_agents(tool, prg):
        if ref.tool_id != tool.id:
            result.add(ref)


def get_agents(tool: Tool, prg: Program) -> list[ToolReference]:
    """The agents a tool can hand off to, each with a name."""
    refs = tool.get_tool_refs_from_names(tool.agents)
    refs += _completion_tool_refs(tool, prg, None, ToolType.AGENT)

    named_refs = []
    for ref in refs:
        if not ref.named:
            target = _lookup(prg, ref.tool_id)
            normed = tool_normalizer(target.name or ref.reference)
            trimmed = normed.removesuffix("Agent").removesuffix("Assistant")
            ref = replace(ref, named=trimmed or normed)
        named_refs.append(ref)
    return named_refs


def get_context_tools(tool: Tool, prg: Program) -> list[ToolReference]:
    """Every context tool of ``tool``, including contexts they export, recursively."""
    result = ToolRefSet()
    result.add_all(_direct_context_refs(tool, prg))
    for ref in _completion_tool_refs(tool, prg, None, ToolType.CONTEXT):
        result.add_all(_exported_context(_lookup(prg, ref.tool_id), prg))
        result.add(ref)
    return result.to_list()


def get_output_filter_tools(tool: Tool, prg: Program) -> list[ToolReference]:
    """The output filters applied to ``tool``."""
    result = ToolRefSet()
    result.add_all(tool.get_tool_refs_from_names(tool.output_filters))
    result.add_all(_completion_tool_refs(tool, prg, None, ToolType.OUTPUT))
    for ref in _direct_context_refs(tool, prg):
        context_tool = _lookup(prg, ref.tool_id)
        result.add_all(
            context_tool.get_tool_refs_from_names(context_tool.export_output_filters)
        )
    return result.to_list()


def get_input_filter_tools(tool: Tool, prg: Program) -> list[ToolReference]:
    """The input filters applied to ``tool``."""
    result = ToolRefSet()
    result.add_all(tool.get_tool_refs_from_names(tool.input_filters))
    result.add_all(_completion_tool_refs(tool, prg, None, ToolType.INPUT))
    for ref in _direct_context_refs(tool, prg):
        context_tool = _lookup(prg, ref.tool_id)
        result.add_all(
            context_tool.get_tool_refs_from_names(context_tool.export_input_filters)
        )
    return result.to_list()


def get_next_agent_group(
    tool: Tool,
    prg: Program,
    agent_group: list[ToolReference],
    tool_id: str,
) -> list[ToolReference]:
    """The agents of ``tool`` if ``tool_id`` is among them, else ``agent_group``."""
    new_group = ToolRefSet()
    _add_agents(tool, prg, new_group)
    if new_group.has_tool(tool_id):
        return new_group.to_list()
    return agent_group


def get_completion_tools(
    tool: Tool, prg: Program, *args: ToolReference
) -> list[CompletionTool]:
    """The tools offered to the model when running ``tool``.

    ``args`` is the current agent group, offered when ``tool`` is a chat tool.
    """
    result = ToolRefSet()
    result.add_all(
        _completion_tool_refs(tool, prg, args, ToolType.DEFAULT, ToolType.TOOL)
    )
    _add_agents(tool, prg, result)
    return tool_refs_to_completion_tools(result.to_list(), prg)


def get_credential_tools(
    tool: Tool, prg: Program, agent_group: Iterable[ToolReference] | None
) -> list[ToolReference]:
    """The credential tools ``tool`` needs, including those shared with it."""
    result = ToolRefSet()
    result.add_all(tool.get_tool_refs_from_names(tool.credentials))
    result.add_all(_completion_tool_refs(tool, prg, None, ToolType.CREDENTIAL))

    for ref in _completion_tool_refs(tool, prg, agent_group):
        referenced = _lookup(prg, ref.tool_id)
        result.add_all(referenced.get_tool_refs_from_names(referenced.export_credentials))

    for ref in get_context_tools(tool, prg):
        context_tool = _lookup(prg, ref.tool_id)
        result.add_all(
            context_tool.get_tool_refs_from_names(context_tool.export_credentials)
        )

    return result.to_list()


def tool_refs_to_completion_tools(
    refs: Iterable[ToolReference], prg: Program
) -> list[CompletionTool]:
    """Turn references into completion tools with unique function names.

    Tools without instructions are left out.
    """
    names: set[str] = set()
    result: list[CompletionTool] = []
    for ref in refs:
        sub_tool = _lookup(prg, ref.tool_id)
        sub_tool_name = ref.named or ref.reference

        args = sub_tool.arguments
        if args is None and not sub_tool.is_command():
            args = copy.deepcopy(
                DEFAULT_CHAT_SCHEMA if sub_tool.chat else DEFAULT_TOOL_SCHEMA
            )

        if not sub_tool.instructions:
            _log.debug(
                "Skipping zero instruction tool %s (%s)", sub_tool_name, sub_tool.id
            )
            continue

        result.append(
            CompletionTool(
                function=CompletionFunctionDefinition(
                    tool_id=sub_tool.id,
                    name=pick_tool_name(sub_tool_name, names),
                    description=sub_tool.description,
                    parameters=args,
                )
            )
        )
    return result