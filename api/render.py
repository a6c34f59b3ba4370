from markdown_it import MarkdownIt
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

_formatter = HtmlFormatter(nowrap=True)


def _highlight(code: str, lang: str, attrs: str) -> str:
    if not lang:
        return ""
    try:
        lexer = get_lexer_by_name(lang)
    except ClassNotFound:
        return ""
    return highlight(code, lexer, _formatter)


# Raw HTML in model output is escaped, not rendered
_md = MarkdownIt("commonmark", {"html": False, "highlight": _highlight}).enable("table")


def render_review(text: str) -> str:
    return _md.render(text) if text else ""


def highlight_css() -> str:
    return HtmlFormatter(style="monokai").get_style_defs("pre code")
