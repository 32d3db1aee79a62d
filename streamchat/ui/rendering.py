"""Markdown to HTML conversion for chat messages.

Fenced code blocks are highlighted with Pygments; everything else gets a
small prose subset (bold, italic, inline code, links, lists, line breaks).
"""

import html
import re

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

CODE_STYLE = "monokai"

_FENCE_RE = re.compile(r"```([\w+#.-]*)[^\n]*\n?([\s\S]*?)```")
_PLACEHOLDER = "\x00CODEBLOCK{}\x00"
_PLACEHOLDER_RE = re.compile(r"\x00CODEBLOCK(\d+)\x00")

_formatter = HtmlFormatter(
    style=CODE_STYLE,
    noclasses=True,
    cssclass="codehilite rounded-lg p-3 my-2 overflow-x-auto text-xs",
)


def highlight_code(code: str, language: str = "") -> str:
    """Render a code block as highlighted HTML.

    Unknown or missing languages fall back to plain, escaped text.
    """
    try:
        lexer = get_lexer_by_name(language) if language else TextLexer()
    except ClassNotFound:
        lexer = TextLexer()
    return highlight(code.rstrip("\n"), lexer, _formatter)


def _render_lists(text: str, item_pattern: str, open_tag: str, close_tag: str) -> str:
    lines = text.split("\n")
    in_list = False
    result = []
    for line in lines:
        stripped = line.strip()
        if re.match(item_pattern, stripped):
            if not in_list:
                result.append(open_tag)
                in_list = True
            item = re.sub(item_pattern, "", stripped)
            result.append(f"<li>{item}</li>")
        else:
            if in_list:
                result.append(close_tag)
                in_list = False
            result.append(line)
    if in_list:
        result.append(close_tag)
    return "\n".join(result)


def _render_prose(text: str) -> str:
    text = html.escape(text, quote=False)

    # Inline code (`code`)
    text = re.sub(
        r"`([^`]+)`",
        r'<code class="bg-zinc-800 text-pink-400 px-1.5 py-0.5 rounded text-xs">\1</code>',
        text,
    )

    # Bold (**text** or __text__)
    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"__(.+?)__", r"<strong>\1</strong>", text)

    # Italic (*text* or _text_)
    text = re.sub(r"(?<![\w*])\*([^*\n]+)\*(?![\w*])", r"<em>\1</em>", text)
    text = re.sub(r"(?<![\w_])_([^_\n]+)_(?![\w_])", r"<em>\1</em>", text)

    # Links [text](url)
    text = re.sub(
        r"\[([^\]]+)\]\(([^)\s]+)\)",
        r'<a href="\2" class="text-blue-400 underline" target="_blank">\1</a>',
        text,
    )

    text = _render_lists(
        text, r"^[-*]\s+", '<ul class="list-disc list-inside my-2 space-y-1">', "</ul>"
    )
    text = _render_lists(
        text, r"^\d+\.\s+", '<ol class="list-decimal list-inside my-2 space-y-1">', "</ol>"
    )

    # Line breaks (preserve newlines as <br>)
    return text.replace("\n", "<br>")


def markdown_to_html(text: str) -> str:
    """Convert message markdown to HTML for chat display.

    Code fences are cut out before the prose rules run so that their
    contents are never touched by emphasis or list handling. An unclosed
    fence (common while a reply is still streaming) stays prose until its
    closing backticks arrive.
    """
    blocks: list[str] = []

    def _stash(match: re.Match[str]) -> str:
        blocks.append(highlight_code(match.group(2), match.group(1)))
        return _PLACEHOLDER.format(len(blocks) - 1)

    text = _FENCE_RE.sub(_stash, text)
    rendered = _render_prose(text)
    return _PLACEHOLDER_RE.sub(lambda m: blocks[int(m.group(1))], rendered)
