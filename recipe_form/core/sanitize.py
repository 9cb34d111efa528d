# recipe_form/core/sanitize.py
from __future__ import annotations

from html import escape
from html.parser import HTMLParser
from typing import List, Optional, Tuple
from urllib.parse import urlsplit

ALLOWED_TAGS = {
    "p", "br", "hr", "div", "span",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "ul", "ol", "li", "dl", "dt", "dd",
    "strong", "b", "em", "i", "u", "small", "sub", "sup",
    "blockquote", "code", "pre",
    "table", "thead", "tbody", "tfoot", "tr", "th", "td", "caption",
    "a",
}
VOID_TAGS = {"br", "hr"}
# Content of these is dropped along with the tag.
DROP_CONTENT_TAGS = {"script", "style", "iframe", "object", "embed", "template", "noscript"}

ALLOWED_ATTRS = {
    "a": {"href", "title"},
    "th": {"colspan", "rowspan"},
    "td": {"colspan", "rowspan"},
    "ol": {"start"},
}
LINK_SCHEMES = {"http", "https", "mailto"}


def _safe_href(value: str) -> bool:
    scheme = urlsplit(value.strip()).scheme.lower()
    # relative links carry no scheme
    return scheme == "" or scheme in LINK_SCHEMES


def is_safe_image_url(url: str) -> bool:
    u = url.strip()
    if u.lower().startswith("data:image/"):
        return True
    return urlsplit(u).scheme.lower() in {"http", "https"}


class _AllowlistParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.out: List[str] = []
        self.open: List[str] = []
        self._drop_depth = 0

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        if tag in DROP_CONTENT_TAGS:
            self._drop_depth += 1
            return
        if self._drop_depth or tag not in ALLOWED_TAGS:
            return
        kept = []
        for name, value in attrs:
            if name not in ALLOWED_ATTRS.get(tag, ()) or value is None:
                continue
            if name == "href" and not _safe_href(value):
                continue
            kept.append(f' {name}="{escape(value, quote=True)}"')
        if tag == "a" and kept:
            kept.append(' rel="noopener noreferrer"')
        self.out.append(f"<{tag}{''.join(kept)}>")
        if tag not in VOID_TAGS:
            self.open.append(tag)

    def handle_startendtag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        if tag in DROP_CONTENT_TAGS:
            return
        self.handle_starttag(tag, attrs)
        if tag in ALLOWED_TAGS and tag not in VOID_TAGS and not self._drop_depth:
            self.handle_endtag(tag)

    def handle_endtag(self, tag: str) -> None:
        if tag in DROP_CONTENT_TAGS:
            self._drop_depth = max(0, self._drop_depth - 1)
            return
        if self._drop_depth or tag not in self.open:
            return
        # close anything left open inside this element
        while self.open:
            inner = self.open.pop()
            self.out.append(f"</{inner}>")
            if inner == tag:
                break

    def handle_data(self, data: str) -> None:
        if not self._drop_depth:
            self.out.append(escape(data, quote=False))

    def result(self) -> str:
        tail = "".join(f"</{t}>" for t in reversed(self.open))
        return "".join(self.out) + tail


def sanitize_html(fragment: str) -> str:
    """
    Reduce backend markup to a formatting-only subset.

    Unknown tags are unwrapped (their text stays), script-like elements are removed
    with their content, attributes are allowlisted per tag and links must be
    http(s), mailto or relative. Comments and processing instructions are dropped.
    """
    parser = _AllowlistParser()
    parser.feed(fragment or "")
    parser.close()
    return parser.result()
