# gptscript

The data model behind GPTScript programs. It covers tools, programs, tool references, completion
messages and requests, and the rules that turn a tool's declared references into the tools,
contexts, agents, filters and credentials used when it runs.

The package has no dependencies outside the standard library.

## Installation

```
pip install gptscript
```

To run the tests:

```
pip install "gptscript[test]"
pytest
```

## What is inside

- `gptscript.tool`: `Tool`, `ToolDef`, `Program`, `ToolReference`, `ToolSource`, `Repo` and
  `ToolType`. `str(tool_def)` renders a tool back into its textual definition.
  `Tool.add_tool_mapping` records what a reference resolves to, and
  `Tool.get_tool_refs_from_names` resolves names through that mapping. It raises
  `ToolNotFoundError` for an unmapped name and `ValueError` when an `as` alias is used with a
  wildcard that matched several tools. `Tool` also has the predicates `is_command`,
  `is_daemon`, `is_openapi`, `is_echo`, `is_http`, `is_noop` and `is_agents_only`, and
  `get_interpreter`. `Program` has `is_chat`, `chat_name`, `top_level_tools` and
  `set_blocking`.
- `gptscript.refs`: `ToolRefSet`, an ordered set of references without duplicates, and the
  resolvers `get_agents`, `get_context_tools`, `get_input_filter_tools`,
  `get_output_filter_tools`, `get_credential_tools`, `get_completion_tools`,
  `get_next_agent_group` and `tool_refs_to_completion_tools`.
- `gptscript.names`: name handling. It includes `tool_normalizer`, `split_tool_ref`,
  `split_arg`, `pick_tool_name`, `to_tool_name`, `is_match`, `first_set` and
  `parse_credential_args`, which raises `CredentialArgError` on malformed input.
- `gptscript.completion`: `CompletionMessage`, `CompletionRequest`, `CompletionTool`,
  `CompletionFunctionDefinition`, `ContentPart`, `CompletionToolCall`,
  `CompletionFunctionCall`, `CompletionStatus`, `Usage`, `CompletionMessageRole` and the
  helper `text()`. Messages and requests have `to_dict()`, which gives a JSON-ready form
  without empty fields.
- `gptscript.schema`: `object_schema` builds a JSON schema for an object whose properties
  are strings.
- `gptscript.prompt`: `Prompt`, with `to_dict()`.
- `gptscript.version`: `Version`, `get()`, `new_version()` and `git_commit()`.

## Examples

Normalizing tool names:

```python
from gptscript.names import tool_normalizer, split_tool_ref

tool_normalizer("bob-tool")                    # "bobTool"
tool_normalizer("bar_list from ./foo.gpt")     # "barList"
split_tool_ref("a from b with x as other")     # ("b", "a")
```

Parsing a credential reference:

```python
from gptscript.names import parse_credential_args

parse_credential_args("myCred as alias with ${v} as arg1", '{"v": "value1"}')
# ("myCred", "alias", {"arg1": "value1"})
```

Rendering a tool definition:

```python
from gptscript.tool import ToolDef
from gptscript.schema import object_schema

tool = ToolDef(name="hello", description="Says hello",
               arguments=object_schema("who", "Who to greet"),
               instructions="Say hello to ${who}")
print(tool)
```

The printed text is:

```
Name: hello
Description: Says hello
Parameter: who: Who to greet

Say hello to ${who}
```

## What it does not do

This package is a library of types and resolution rules only. It does not read or parse
`.gpt` files into a `Program`, it does not call a model or run tools, and it does not turn a
running tool into a description for display. It has no command line. You build the `Tool`
and `Program` objects yourself, or with some other loader, and then use this package to work
out what each tool can reach.