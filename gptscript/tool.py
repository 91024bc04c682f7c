"""Tools, their definitions and the programs built from them."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Any, Callable

from gptscript.names import ToolNotFoundError, is_match, split_arg, split_tool_ref

DAEMON_PREFIX = "#!sys.daemon"
OPENAPI_PREFIX = "#!sys.openapi"
ECHO_PREFIX = "#!sys.echo"
COMMAND_PREFIX = "#!"

DEFAULT_FILES = ("agent.gpt", "tool.gpt")

BuiltinFunc = Callable[..., str]


class ToolType(str, enum.Enum):
    """The role a tool plays when referenced by another tool."""

    CONTEXT = "context"
    AGENT = "agent"
    OUTPUT = "output"
    INPUT = "input"
    ASSISTANT = "assistant"
    TOOL = "tool"
    CREDENTIAL = "credential"
    PROVIDER = "provider"
    DEFAULT = ""


@dataclass
class ToolReference:
    """A resolved reference from one tool to another."""

    named: str = ""
    reference: str = ""
    arg: str = ""
    tool_id: str = ""


@dataclass
class Repo:
    """Where in a version-controlled repository a tool came from."""

    vcs: str = ""
    root: str = ""
    path: str = ""
    name: str = ""
    revision: str = ""


@dataclass
class ToolSource:
    """The location a tool was loaded from."""

    location: str = ""
    line_no: int = 0
    repo: Repo | None = None

    def is_git(self) -> bool:
        """Whether the tool came from a git repository."""
        return self.repo is not None and self.repo.vcs == "git"

    def __str__(self) -> str:
        return f"{self.location}:{self.line_no}"


def _base_name(path: str) -> str:
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


@dataclass
class ToolDef:
    """The declared parameters and instructions of a tool."""

    name: str = ""
    description: str = ""
    max_tokens: int = 0
    model_name: str = ""
    model_provider: bool = False
    json_response: bool = False
    chat: bool = False
    temperature: float | None = None
    cache: bool | None = None
    internal_prompt: bool | None = None
    arguments: dict[str, Any] | None = None
    tools: list[str] = field(default_factory=list)
    global_tools: list[str] = field(default_factory=list)
    global_model_name: str = ""
    context: list[str] = field(default_factory=list)
    export_context: list[str] = field(default_factory=list)
    export: list[str] = field(default_factory=list)
    agents: list[str] = field(default_factory=list)
    credentials: list[str] = field(default_factory=list)
    export_credentials: list[str] = field(default_factory=list)
    input_filters: list[str] = field(default_factory=list)
    export_input_filters: list[str] = field(default_factory=list)
    output_filters: list[str] = field(default_factory=list)
    export_output_filters: list[str] = field(default_factory=list)
    blocking: bool = False
    type: ToolType = ToolType.DEFAULT
    instructions: str = ""
    builtin_func: BuiltinFunc | None = None
    meta_data: dict[str, str] = field(default_factory=dict)

    def tool_ref_names(self) -> list[str]:
        """Every tool name this definition refers to."""
        return [
            *self.tools,
            *self.agents,
            *self.export,
            *self.export_context,
            *self.context,
            *self.credentials,
            *self.export_credentials,
            *self.input_filters,
            *self.export_input_filters,
            *self.output_filters,
            *self.export_output_filters,
        ]

    def __str__(self) -> str:
        lines: list[str] = []

        def listed(label: str, values: list[str]) -> None:
            if values:
                lines.append(f"{label}: {', '.join(values)}")

        if self.global_model_name:
            lines.append(f"Global Model Name: {self.global_model_name}")
        listed("Global Tools", self.global_tools)
        if self.name:
            lines.append(f"Name: {self.name}")
        if self.description:
            lines.append(f"Description: {self.description}")
        type_name = ToolType(self.type).value
        if type_name:
            lines.append(f"Type: {type_name[0].upper()}{type_name[1:]}")
        listed("Agents", self.agents)
        listed("Tools", self.tools)
        listed("Share Tools", self.export)
        listed("Context", self.context)
        listed("Share Context", self.export_context)
        listed("Input Filters", self.input_filters)
        listed("Share Input Filters", self.export_input_filters)
        listed("Output Filters", self.output_filters)
        listed("Share Output Filters", self.export_output_filters)
        if self.max_tokens:
            lines.append(f"Max Tokens: {self.max_tokens}")
        if self.model_name:
            lines.append(f"Model: {self.model_name}")
        if self.model_provider:
            lines.append("Model Provider: true")
        if self.json_response:
            lines.append("JSON Response: true")
        if self.cache is not None and not self.cache:
            lines.append("Cache: false")
        if self.temperature is not None:
            lines.append(f"Temperature: {self.temperature:f}")
        if self.arguments is not None:
            properties = self.arguments.get("properties") or {}
            for key in sorted(properties):
                description = (properties[key] or {}).get("description", "")
                lines.append(f"Parameter: {key}: {description}")
        if self.internal_prompt is not None:
            lines.append(f"Internal Prompt: {str(self.internal_prompt).lower()}")
        lines.extend(f"Credential: {cred}" for cred in self.credentials)
        lines.extend(f"Share Credential: {cred}" for cred in self.export_credentials)
        if self.chat:
            lines.append("Chat: true")

        out = "".join(line + "\n" for line in lines)

        if self.instructions and self.builtin_func is None:
            out += "\n" + self.instructions + "\n"

        if self.name:
            for key in sorted(self.meta_data):
                out += f"---\n!metadata:{self.name}:{key}\n{self.meta_data[key]}\n"

        return out


@dataclass
class Tool(ToolDef):
    """A loaded tool with its resolved references."""

    id: str = ""
    tool_mapping: dict[str, list[ToolReference]] = field(default_factory=dict)
    local_tools: dict[str, str] = field(default_factory=dict)
    source: ToolSource = field(default_factory=ToolSource)
    working_dir: str = ""

    def add_tool_mapping(self, name: str, tool: Tool) -> None:
        """Record that ``name`` resolves to ``tool``."""
        ref = name
        _, sub_tool = split_tool_ref(name)
        if is_match(sub_tool) and tool.name:
            ref = ref.replace(sub_tool, tool.name, 1)

        existing = self.tool_mapping.setdefault(name, [])
        if any(r.tool_id == tool.id and r.reference == ref for r in existing):
            return
        existing.append(ToolReference(reference=ref, tool_id=tool.id))

    def get_tool_refs_from_names(self, names: list[str]) -> list[ToolReference]:
        """Resolve tool names through this tool's mapping.

        Raises ToolNotFoundError for an unmapped name, and ValueError when an
        alias is given for a wildcard that matched several tools.
        """
        result: list[ToolReference] = []
        for tool_name in names:
            tool_refs = self.tool_mapping.get(tool_name)
            if not tool_refs:
                raise ToolNotFoundError(tool_name)
            _, arg = split_arg(tool_name)
            named = ""
            if arg.startswith("as "):
                named = arg[len("as ") :]
                if len(tool_refs) > 1:
                    raise ValueError(
                        f"can not combine 'as' syntax with wildcard: {tool_name}"
                    )
            result.extend(
                ToolReference(
                    named=named,
                    arg=arg,
                    reference=ref.reference,
                    tool_id=ref.tool_id,
                )
                for ref in tool_refs
            )
        return result

    def get_interpreter(self) -> str:
        """The program that runs a command tool, or an empty string."""
        if not self.instructions.startswith(COMMAND_PREFIX):
            return ""
        fields = self.instructions[len(COMMAND_PREFIX) :].split()
        for word in fields:
            name = _base_name(word)
            if name != "env":
                return name
        return fields[0] if fields else ""

    def is_noop(self) -> bool:
        return self.instructions == ""

    def is_command(self) -> bool:
        return self.instructions.startswith(COMMAND_PREFIX)

    def is_daemon(self) -> bool:
        return self.instructions.startswith(DAEMON_PREFIX)

    def is_openapi(self) -> bool:
        return self.instructions.startswith(OPENAPI_PREFIX)

    def is_agents_only(self) -> bool:
        return self.is_noop() and not self.context

    def is_echo(self) -> bool:
        return self.instructions.startswith(ECHO_PREFIX)

    def is_http(self) -> bool:
        return self.instructions.startswith(("#!http://", "#!https://"))


@dataclass
class Program:
    """A set of tools with one entry point."""

    name: str = ""
    entry_tool_id: str = ""
    tool_set: dict[str, Tool] = field(default_factory=dict)
    openapi_cache: dict[str, Any] = field(default_factory=dict)

    def _entry(self) -> Tool:
        return self.tool_set.get(self.entry_tool_id) or Tool()

    def is_chat(self) -> bool:
        """Whether the entry tool is a chat tool."""
        return self._entry().chat

    def chat_name(self) -> str:
        """The entry tool's name for chats, else the program's name."""
        if self.is_chat() and self._entry().name:
            return self._entry().name
        return self.name

    def top_level_tools(self) -> list[Tool]:
        """The tools defined locally alongside the entry tool."""
        return [
            self.tool_set[tool_id]
            for tool_id in self._entry().local_tools.values()
            if tool_id in self.tool_set
        ]

    def set_blocking(self) -> Program:
        """A copy of the program whose entry tool blocks."""
        tools = dict(self.tool_set)
        tools[self.entry_tool_id] = replace(self._entry(), blocking=True)
        return replace(self, tool_set=tools)