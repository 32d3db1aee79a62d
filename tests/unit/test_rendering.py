"""Unit tests for chat markdown rendering."""

from streamchat.ui.rendering import highlight_code, markdown_to_html


class TestCodeBlocks:
    def test_fenced_block_with_language_is_highlighted(self) -> None:
        html = markdown_to_html("Here:\n```python\ndef add(a, b):\n    return a + b\n```")

        assert "codehilite" in html
        assert "<span style=" in html
        assert "add" in html
        assert "```" not in html

    def test_code_contents_are_not_treated_as_prose(self) -> None:
        html = markdown_to_html("```python\nx = a * b * c\n__init__ = 1\n```")

        assert "<em>" not in html
        assert "<strong>" not in html

    def test_unknown_language_falls_back_to_plain_text(self) -> None:
        html = highlight_code("<tag>", "not-a-language")

        assert "&lt;tag&gt;" in html

    def test_fence_without_language(self) -> None:
        html = markdown_to_html("```\nplain text\n```")

        assert "codehilite" in html
        assert "plain text" in html

    def test_unclosed_fence_stays_prose(self) -> None:
        """A reply cut mid-stream still renders."""
        html = markdown_to_html("```python\ndef add(")

        assert "codehilite" not in html
        assert "def add(" in html


class TestProse:
    def test_html_is_escaped(self) -> None:
        html = markdown_to_html("<script>alert(1)</script>")

        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_emphasis_and_inline_code(self) -> None:
        html = markdown_to_html("**bold** and *italic* and `code`")

        assert "<strong>bold</strong>" in html
        assert "<em>italic</em>" in html
        assert "code</code>" in html

    def test_links(self) -> None:
        html = markdown_to_html("[docs](https://example.com)")

        assert 'href="https://example.com"' in html

    def test_lists(self) -> None:
        html = markdown_to_html("- one\n- two\n\n1. first\n2. second")

        assert html.count("<li>") == 4
        assert "<ul" in html
        assert "<ol" in html

    def test_newlines_become_breaks(self) -> None:
        assert markdown_to_html("a\nb") == "a<br>b"
