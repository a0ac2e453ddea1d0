from modelrouter.prompt_layers import JSON_INSTRUCTION, create_messages, with_json_instruction

def test_empty_layers_are_dropped():
    assert create_messages("", "  hi  ") == [{"role": "user", "content": "hi"}]
    assert create_messages("   ", "") == []

def test_system_then_user():
    msgs = create_messages("sys", "question")
    assert [m["role"] for m in msgs] == ["system", "user"]

def test_json_instruction_appended_when_system_does_not_mention_json():
    msgs = create_messages("Summarize the article.", "text")
    out = with_json_instruction(msgs)
    assert out[0]["content"].startswith("Summarize the article.")
    assert JSON_INSTRUCTION in out[0]["content"]
    # input is left untouched
    assert msgs[0]["content"] == "Summarize the article."

def test_json_instruction_not_duplicated():
    msgs = create_messages("Reply in JSON with keys a and b.", "text")
    assert with_json_instruction(msgs) == msgs

def test_synthetic_system_message_when_none_given():
    out = with_json_instruction(create_messages("", "text"))
    assert out[0] == {"role": "system", "content": JSON_INSTRUCTION}
    assert out[1] == {"role": "user", "content": "text"}
