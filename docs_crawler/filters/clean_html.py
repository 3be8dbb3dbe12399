"""
Generic HTML cleanup applied to every documentation page.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from ..core import html as html_query
from .base import Filter, FilterContext

REMOVED_TAGS = ("script", "style", "link", "noscript", "template")
STRIPPED_ATTRIBUTES = ("class", "style")
LANGUAGE_PREFIXES = ("language-", "lang-")


def detect_language(pre: Tag) -> str | None:
    """Language of a code block from ``data-language`` or ``language-*`` classes."""
    candidates = [pre, *pre.find_all(True)]
    for node in candidates:
        language = node.get("data-language")
        if language:
            return str(language)
        for cls in html_query.classes(node):
            for prefix in LANGUAGE_PREFIXES:
                if cls.startswith(prefix) and len(cls) > len(prefix):
                    return cls[len(prefix):]
    return None


class CleanHtmlFilter(Filter):
    """
    Strips page chrome and presentation markup.

    Narrows the document to ``container`` (or ``<body>``), removes scripts,
    styles, comments and the ``remove`` selectors, unwraps the ``unwrap``
    wrapper selectors, rewrites ``<pre>`` blocks to a single ``<code>``
    child and drops class and style attributes.
    """

    name = "clean_html"

    def __init__(
        self,
        container: str | None = None,
        remove: list[str] | None = None,
        unwrap: list[str] | None = None,
        strip_attributes: bool = True,
    ) -> None:
        super().__init__()
        self.container = container
        self.remove = list(remove or [])
        self.unwrap = list(unwrap or [])
        self.strip_attributes = strip_attributes

    def apply(self, html: str, context: FilterContext) -> str:
        doc = self.parse(html)
        if not context.title:
            title = doc.find("title")
            if title is not None and title.get_text().strip():
                context.title = title.get_text().strip()

        root = self._select_root(doc)

        for tag in root.find_all(list(REMOVED_TAGS)):
            if not tag.decomposed:
                tag.decompose()
        html_query.remove_comments(root)

        for selector in self.remove:
            for node in self.css(root, selector):
                if not node.decomposed:
                    node.decompose()
        for selector in self.unwrap:
            for node in self.css(root, selector):
                node.unwrap()

        for pre in root.find_all("pre"):
            self._normalize_code_block(doc, pre)

        if self.strip_attributes:
            for node in [root, *root.find_all(True)]:
                for attribute in STRIPPED_ATTRIBUTES:
                    if attribute in node.attrs:
                        del node.attrs[attribute]

        if root is doc:
            return str(doc).strip()
        return html_query.inner_html(root).strip()

    def _select_root(self, doc: BeautifulSoup) -> Tag:
        if self.container:
            container = self.at_css(doc, self.container)
            if container is not None:
                return container
            self.logger.debug(f"Container {self.container!r} not found, using body")
        body = doc.find("body")
        return body if body is not None else doc

    def _normalize_code_block(self, doc: BeautifulSoup, pre: Tag) -> None:
        language = detect_language(pre)
        lines = self.css(pre, ".token-line")
        if lines:
            code_text = "\n".join(line.get_text() for line in lines)
        else:
            code_text = pre.get_text()

        pre.clear()
        code = doc.new_tag("code")
        code.string = code_text
        pre.append(code)

        for attribute in list(pre.attrs):
            del pre.attrs[attribute]
        if language:
            pre["data-language"] = language
            code["data-language"] = language
