"""Tests for polychat.payload."""

from polychat import filter_payload, strip_contents


ALLOWED = frozenset({"messages", "model", "temperature"})

PAYLOADS = [
    {},
    {"model": "gpt-4o"},
    {"model": "gpt-4o", "internal_id": 7, "temperature": 0.2},
    {"messages": [{"role": "user", "content": "hi"}], "agent": "chat", "stream": True},
]


class TestFilterPayload:
    def test_keeps_only_allowed_keys(self):
        result = filter_payload(ALLOWED, {"model": "m", "secret": 1, "temperature": 0})
        assert result == {"model": "m", "temperature": 0}

    def test_exactness(self):
        for payload in PAYLOADS:
            result = filter_payload(ALLOWED, payload)
            assert set(result) <= ALLOWED
            for key in ALLOWED & payload.keys():
                assert result[key] is payload[key]

    def test_idempotent(self):
        for payload in PAYLOADS:
            once = filter_payload(ALLOWED, payload)
            assert filter_payload(ALLOWED, once) == once

    def test_does_not_mutate_input(self):
        payload = {"model": "m", "extra": True}
        filter_payload(ALLOWED, payload)
        assert payload == {"model": "m", "extra": True}

    def test_values_not_deep_copied(self):
        messages = [{"role": "user", "content": "hi"}]
        result = filter_payload(ALLOWED, {"messages": messages})
        assert result["messages"] is messages

    def test_preserves_key_order(self):
        result = filter_payload(ALLOWED, {"temperature": 1, "x": 0, "model": "m"})
        assert list(result) == ["temperature", "model"]

    def test_accepts_any_collection_as_allow_list(self):
        assert filter_payload(["model"], {"model": "m", "x": 1}) == {"model": "m"}


class TestStripContents:
    def test_trims_content(self):
        result = strip_contents([{"role": "user", "content": "  hi \n"}])
        assert result == [{"role": "user", "content": "hi"}]

    def test_keeps_order_and_count(self):
        messages = [
            {"role": "system", "content": " a"},
            {"role": "user", "content": "b "},
            {"role": "assistant", "content": "c"},
        ]
        result = strip_contents(messages)
        assert [m["content"] for m in result] == ["a", "b", "c"]
        assert [m["role"] for m in result] == ["system", "user", "assistant"]

    def test_does_not_mutate_input(self):
        messages = [{"role": "user", "content": "  hi  "}]
        strip_contents(messages)
        assert messages[0]["content"] == "  hi  "

    def test_non_string_content_passes_through(self):
        parts = [{"type": "text", "text": " x "}]
        result = strip_contents([{"role": "user", "content": parts}])
        assert result[0]["content"] is parts
