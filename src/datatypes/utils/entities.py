from __future__ import annotations

import html as html_mod
import re
from html.entities import codepoint2name

# An '&' that already starts a named or numeric character reference.
_BARE_AMP = re.compile(r"&(?!(?:[A-Za-z][A-Za-z0-9]*|#[0-9]+|#[xX][0-9A-Fa-f]+);)")


def escape(text: str, quote: bool = True, single_quote: bool = True) -> str:
    """
    Escapes HTML special characters without double-encoding existing entities.

    Args:
        text (str): The input text.
        quote (bool): Escape double quotes as &quot;.
        single_quote (bool): Escape single quotes as &#039; (only when quote is set).

    Returns:
        str: The escaped text.
    """
    if not text:
        return ""
    out = _BARE_AMP.sub("&amp;", text)
    out = out.replace("<", "&lt;").replace(">", "&gt;")
    if quote:
        out = out.replace('"', "&quot;")
        if single_quote:
            out = out.replace("'", "&#039;")
    return out


def escape_text(text: str) -> str:
    """Escapes a text run: markup characters and double quotes, single quotes left alone."""
    return escape(text, quote=True, single_quote=False)


def escape_all(text: str) -> str:
    """Escapes like escape(), then encodes every non-ASCII character with a named entity."""
    out = escape(text, quote=True, single_quote=False)
    return "".join(
        f"&{codepoint2name[ord(ch)]};" if ord(ch) > 127 and ord(ch) in codepoint2name else ch
        for ch in out
    )


def unescape(text: str) -> str:
    """Decodes all named and numeric character references."""
    if not text:
        return ""
    return html_mod.unescape(text)
