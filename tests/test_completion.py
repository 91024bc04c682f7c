from gptscript.completion import (
    CompletionFunctionCall,
    CompletionFunctionDefinition,
    CompletionMessage,
    CompletionMessageRole,
    CompletionRequest,
    CompletionTool,
    CompletionToolCall,
    ContentPart,
    Usage,
    text,
)


def test_text_builds_single_part():
    parts = text("hello")
    assert parts == [ContentPart(text="hello")]


def test_chat_text_skips_empty_parts():
    msg = CompletionMessage(content=[ContentPart(text="a"), ContentPart(), ContentPart(text="b")])
    assert msg.chat_text().split(" ") == ["a", "b"]


def test_chat_text_single():
    msg = CompletionMessage(content=text("only"))
    assert msg.chat_text() == "only"


def test_is_tool_call():
    call = CompletionToolCall(id="c1", function=CompletionFunctionCall(name="fn", arguments="{}"))
    assert CompletionMessage(content=[ContentPart(tool_call=call)]).is_tool_call()
    assert not CompletionMessage(content=text("x")).is_tool_call()


def test_str_includes_tool_call():
    call = CompletionToolCall(function=CompletionFunctionCall(name="fn", arguments="args"))
    msg = CompletionMessage(content=[ContentPart(text="first"), ContentPart(tool_call=call)])
    lines = str(msg).split("\n")
    assert lines[0] == "first"
    assert lines[1] == "<tool call> fn -> args"


def test_message_to_dict_roles_and_usage():
    msg = CompletionMessage(
        role=CompletionMessageRole.ASSISTANT,
        content=text("hi"),
        usage=Usage(prompt_tokens=3),
    )
    data = msg.to_dict()
    assert data["role"] == "assistant"
    assert data["content"] == [{"text": "hi"}]
    assert data["usage"] == {"promptTokens": 3}
    assert "toolCall" not in data


def test_message_to_dict_tool_call_index_zero_kept():
    call = CompletionToolCall(index=0, id="c", function=CompletionFunctionCall(name="n"))
    data = CompletionMessage(content=[ContentPart(tool_call=call)]).to_dict()
    assert data["content"][0]["toolCall"]["index"] == 0
    assert data["content"][0]["toolCall"]["function"] == {"name": "n"}


def test_cache_enabled_defaults_true():
    assert CompletionRequest().cache_enabled() is True
    assert CompletionRequest(cache=False).cache_enabled() is False
    assert CompletionRequest(cache=True).cache_enabled() is True


def test_request_to_dict_omits_empty():
    assert CompletionRequest().to_dict() == {}


def test_request_to_dict_fields():
    tool = CompletionTool(
        function=CompletionFunctionDefinition(name="fn", tool_id="id1", parameters={"type": "object"})
    )
    req = CompletionRequest(
        model="m",
        tools=[tool],
        messages=[CompletionMessage(role=CompletionMessageRole.USER, content=text("q"))],
        max_tokens=10,
        chat=True,
        temperature=0.5,
        json_response=True,
        cache=False,
        internal_system_prompt=False,
    )
    data = req.to_dict()
    assert data["model"] == "m"
    assert data["tools"][0]["function"]["toolID"] == "id1"
    assert data["tools"][0]["function"]["parameters"] == {"type": "object"}
    assert "description" not in data["tools"][0]["function"]
    assert data["messages"][0]["role"] == "user"
    assert data["maxTokens"] == 10
    assert data["chat"] is True
    assert data["temperature"] == 0.5
    assert data["jsonResponse"] is True
    assert data["cache"] is False
    assert data["internalSystemPrompt"] is False