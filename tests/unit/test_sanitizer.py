import pytest

from astraventa.core.sanitizer import sanitize, strip_reasoning


@pytest.mark.unit
class TestSanitize:
    def test_removes_reasoning_span(self):
        assert sanitize("<think>secret</think>Hello") == "Hello"

    def test_collapses_excess_newlines(self):
        assert sanitize("a\n\n\n\nb") == "a\n\nb"

    def test_keeps_double_newlines(self):
        assert sanitize("a\n\nb") == "a\n\nb"

    @pytest.mark.parametrize("raw", ["", None])
    def test_missing_input_yields_empty_text(self, raw):
        assert sanitize(raw) == ""

    def test_reasoning_only_reply_is_empty(self):
        assert sanitize("<think>Let me consider the menu...</think>\n\n  ") == ""

    def test_removes_every_span_case_insensitively(self):
        raw = "<THINK>one</THINK>Pasta<think>two</think> and <Think>three</tHiNk>wine"
        assert sanitize(raw) == "Pasta and wine"

    def test_span_may_cross_lines(self):
        assert sanitize("<think>line one\nline two\n</think>\nWe open at 11am.") == (
            "We open at 11am."
        )

    def test_match_is_not_greedy(self):
        assert sanitize("<think>a</think>keep<think>b</think>") == "keep"

    def test_removes_redacted_reasoning_variant(self):
        assert sanitize("<think>plan</redacted_reasoning>Table for two?") == "Table for two?"

    def test_unterminated_marker_is_left_alone(self):
        assert sanitize("<think>still thinking") == "<think>still thinking"

    def test_trims_surrounding_whitespace(self):
        assert sanitize("  \n Hello there \n\n") == "Hello there"

    def test_removal_then_collapse(self):
        assert sanitize("Hi\n\n<think>x</think>\n\nthere") == "Hi\n\nthere"

    def test_nested_markup_is_fully_removed(self):
        assert strip_reasoning("<thi<think>x</think>nk>y</think>Hello") == "Hello"


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [
        "",
        "plain answer",
        "<think>secret</think>Hello",
        "a\n\n\n\nb",
        "\n\n\n<think>x</think>\n\n\n",
        "<thi<think>x</think>nk>y</think>Hello",
        "<think>a</think><think>b</redacted_reasoning>c\n\n\n\n\nd  ",
        "  <THINK>\n</THINK>  spaced  ",
        "<think>unterminated\n\n\n\nreply",
    ],
)
def test_sanitize_is_idempotent(raw):
    once = sanitize(raw)
    assert sanitize(once) == once
