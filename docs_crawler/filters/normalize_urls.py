"""
Rewrites link targets so internal links point at canonical page paths.
"""

from __future__ import annotations

from urllib.parse import urldefrag, urljoin

from .base import Filter, FilterContext

URL_ATTRIBUTES = (("a", "href"), ("img", "src"))
SKIPPED_SCHEMES = ("mailto:", "javascript:", "tel:")


class NormalizeUrlsFilter(Filter):
    """
    Resolves relative links against the page URL.

    Links into the documentation site are rewritten to their canonical
    form and recorded on the context so the crawler can follow them. With
    an ``output_prefix`` the canonical form is ``prefix + subpath``,
    otherwise it is the absolute URL. Fragment, data and mailto links are
    left alone.
    """

    name = "normalize_urls"

    def __init__(
        self, output_prefix: str | None = None, trailing_slash: bool = False
    ) -> None:
        super().__init__()
        self.output_prefix = output_prefix
        self.trailing_slash = trailing_slash

    def apply(self, html: str, context: FilterContext) -> str:
        doc = self.parse(html)

        for tag_name, attribute in URL_ATTRIBUTES:
            for node in doc.find_all(tag_name):
                value = node.get(attribute)
                if not value:
                    continue
                try:
                    node[attribute] = self.normalize(str(value).strip(), context, tag_name)
                except ValueError as e:
                    self.logger.debug(f"Leaving malformed URL {value!r} as is: {e}")

        return str(doc)

    def normalize(self, url: str, context: FilterContext, tag_name: str = "a") -> str:
        if (
            self.is_fragment_url(url)
            or self.is_data_url(url)
            or url.lower().startswith(SKIPPED_SCHEMES)
        ):
            return url

        absolute = urljoin(context.current_url, url)
        if not absolute.startswith(context.base_url):
            return absolute

        without_fragment, fragment = urldefrag(absolute)
        if tag_name == "a":
            context.add_link(without_fragment)

        if self.output_prefix is None:
            return absolute

        path = self.subpath(context, without_fragment)
        if self.trailing_slash and path and "." not in path.rsplit("/", 1)[-1]:
            path += "/"
        rewritten = self.output_prefix.rstrip("/") + "/" + path
        if fragment:
            rewritten += "#" + fragment
        return rewritten
