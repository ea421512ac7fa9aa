"""Tests for polychat.types."""

from polychat import (
    DecodeError,
    NoContent,
    TextDelta,
    TransportConfig,
    VendorError,
    assistant,
    system,
    user,
)


class TestMessages:
    def test_system_message(self):
        m = system("You are helpful.")
        assert m == {"role": "system", "content": "You are helpful."}

    def test_user_message(self):
        assert user("Hi") == {"role": "user", "content": "Hi"}

    def test_assistant_message(self):
        assert assistant("Hello!") == {"role": "assistant", "content": "Hello!"}


class TestParseResults:
    def test_text_delta(self):
        assert TextDelta(text="Hi").text == "Hi"

    def test_no_content_equality(self):
        assert NoContent() == NoContent()

    def test_decode_error_is_distinct_from_no_content(self):
        assert DecodeError(reason="bad") != NoContent()

    def test_frozen(self):
        r = TextDelta(text="x")
        try:
            r.text = "y"  # type: ignore[misc]
            assert False, "Should be frozen"
        except AttributeError:
            pass

    def test_vendor_error_defaults(self):
        err = VendorError(message="boom")
        assert err.code is None
        assert err.status is None


class TestTransportConfig:
    def test_args_without_headers(self):
        config = TransportConfig(endpoint="https://example.com")
        assert config.args() == ["https://example.com"]

    def test_args_keep_header_order(self):
        config = TransportConfig(
            endpoint="https://example.com",
            headers={"x-api-key": "k", "anthropic-version": "2023-06-01"},
        )
        assert config.args() == [
            "https://example.com",
            "-H",
            "x-api-key: k",
            "-H",
            "anthropic-version: 2023-06-01",
        ]
