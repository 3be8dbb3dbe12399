"""
Test the built-in site definitions and their entry filters.
"""

import pytest

from docs_crawler.exceptions import UnknownSiteError
from docs_crawler.filters.base import FilterContext
from docs_crawler.filters.registry import FilterRegistry
from docs_crawler.sites import (
    babel_site,
    default_sites,
    html_site,
    javascript_site,
    rust_site,
    typescript_site,
)
from docs_crawler.sites.babel import BabelEntriesFilter
from docs_crawler.sites.mdn import MDN_ROOT, HtmlEntriesFilter, JavaScriptEntriesFilter

BABEL = "https://babeljs.io/docs/"
HTML_BASE = f"{MDN_ROOT}/HTML"
JS_BASE = f"{MDN_ROOT}/JavaScript/Reference"


def context_for(base: str, path: str, source_html: str = "") -> FilterContext:
    url = base if path == "index" else f"{base.rstrip('/')}/{path}"
    return FilterContext(
        base_url=base,
        current_url=url,
        current_path=path,
        source_html=source_html,
        initial_paths=["/Global_Objects", "/Operators", "/Statements"],
    )


class TestSiteRegistry:
    """Test lookups of site definitions."""

    @pytest.mark.unit
    def test_default_sites(self):
        """Test that every built-in site is registered."""
        sites = default_sites()

        assert sites.slugs() == ["babel", "css", "html", "javascript", "rust", "typescript"]
        assert [site.name for site in sites.all()] == [
            "Babel",
            "CSS",
            "HTML",
            "JavaScript",
            "Rust",
            "TypeScript",
        ]
        assert "babel" in sites

    @pytest.mark.unit
    def test_unknown_site(self):
        """Test that an unknown slug raises a KeyError subtype."""
        with pytest.raises(UnknownSiteError) as exc_info:
            default_sites().get("cobol")

        assert isinstance(exc_info.value, KeyError)
        assert "cobol" in str(exc_info.value)

    @pytest.mark.unit
    def test_build_pipeline_registers_site_filters(self, filter_registry: FilterRegistry):
        """Test that a site's filters are registered before stacking."""
        pipeline = babel_site().build_pipeline(filter_registry)

        assert pipeline.names() == ["babel_clean_html", "normalize_urls", "babel_entries"]
        assert pipeline.emits_entries
        assert "babel_entries" in filter_registry


class TestBabelSite:
    """Test the Babel definition."""

    @pytest.mark.unit
    def test_versions_and_releases(self):
        """Test release resolution per version."""
        assert babel_site("6").release == "6.26.1"
        assert babel_site("6").directory_name == "babel~6"
        assert babel_site().release == "7.21.4"
        assert babel_site().directory_name == "babel"

    @pytest.mark.unit
    def test_crawl_rules(self):
        """Test skipped sections and legacy links."""
        policy = babel_site().policy

        assert policy.should_process_url(f"{BABEL}babel-preset-env")
        assert policy.should_process_url(f"{BABEL}usage")
        assert not policy.should_process_url(f"{BABEL}usage/options")
        assert not policy.should_process_url(f"{BABEL}en/options")
        assert not policy.should_process_url("https://babeljs.io/blog/")
        assert policy.normalize_url(f"{BABEL}options") == f"{BABEL}options/"

    @pytest.mark.unit
    def test_entry_types(self):
        """Test name prefix and path typing of Babel pages."""
        entries_filter = BabelEntriesFilter()

        def typed(heading: str, path: str) -> tuple[str, str]:
            [entry] = entries_filter.get_entries(
                f"<h1>{heading}</h1>", context_for(BABEL, path)
            )
            return entry.name, entry.type

        assert typed("Options", "options") == ("Options", "Usage")
        assert typed("@babel/preset-env", "babel-preset-env") == ("@babel/preset-env", "Presets")
        assert typed("@babel/core", "babel-core") == ("@babel/core", "Tooling")
        assert typed("@babel/plugin-transform-classes", "babel-plugin-transform-classes") == (
            "@babel/plugin-transform-classes",
            "Other Plugins",
        )
        assert typed("What is Babel?", "index") == ("What is Babel?", "Miscellaneous")

    @pytest.mark.unit
    def test_crawl_request_and_meta(self):
        """Test derived request and metadata."""
        site = babel_site("7")
        request = site.crawl_request(max_pages=10)
        meta = site.doc_meta(db_size=42)

        assert request.slug == "babel" and request.max_pages == 10
        assert request.release == "7.21.4"
        assert meta.directory_name == "babel~7"
        assert meta.db_size == 42
        assert meta.links["code"] == "https://github.com/babel/babel"


class TestHtmlEntries:
    """Test the MDN HTML entry rules."""

    @pytest.mark.unit
    def test_names_and_types(self):
        """Test naming of elements, attributes and input types."""
        entries_filter = HtmlEntriesFilter()

        def entry(path: str, source: str = "<p></p>"):
            return entries_filter.get_entries("", context_for(HTML_BASE, path, source))

        assert [(e.name, e.type) for e in entry("Element/div")] == [("div", "Elements")]
        assert [(e.name, e.type) for e in entry("Global_attributes/class")] == [
            ("class (attribute)", "Attributes")
        ]
        assert entry("Element/input/checkbox")[0].name == 'input type="checkbox"'
        assert entry("Element/blink", '<div class="obsolete">x</div>')[0].type == "Obsolete"
        assert entry("CORS_settings_attributes")[0].type == "Miscellaneous"

    @pytest.mark.unit
    def test_skipped_pages(self):
        """Test pages without a default entry."""
        entries_filter = HtmlEntriesFilter()
        headings = entries_filter.get_entries(
            "", context_for(HTML_BASE, "Element/Heading_Elements")
        )
        non_standard = entries_filter.get_entries(
            "",
            context_for(
                HTML_BASE,
                "Element/marquee",
                '<div class="overheadIndicator">This is not on a standards track.</div>',
            ),
        )

        assert [e.name for e in headings] == ["h1", "h2", "h3", "h4", "h5", "h6"]
        assert non_standard == []

    @pytest.mark.unit
    def test_attribute_table(self):
        """Test entries for rows of the attributes reference table."""
        source = (
            '<table class="standard-table">'
            "<tr><td><code>accept</code></td><td>form, input</td></tr>"
            "<tr><td><code>class</code></td><td>Global attribute</td></tr>"
            "</table>"
        )

        entries = HtmlEntriesFilter().get_entries(
            "", context_for(HTML_BASE, "Attributes", source)
        )

        assert [(e.name, e.path) for e in entries] == [
            ("attributes", "Attributes"),
            ("accept (attribute)", "Attributes#accept-(attribute)"),
        ]

    @pytest.mark.unit
    def test_link_types_table(self):
        """Test rel entries from the link types table."""
        source = (
            '<table class="standard-table">'
            "<tr><td><code>nofollow</code></td><td>a</td></tr></table>"
        )

        entries = HtmlEntriesFilter().get_entries(
            "", context_for(HTML_BASE, "Link_types", source)
        )

        assert ("rel: nofollow", "Link_types#rel:-nofollow") in {
            (e.name, e.path) for e in entries
        }

    @pytest.mark.unit
    def test_source_parsed_once_per_page(self):
        """Test that the fetched page is parsed once and reused across rules."""
        context = context_for(HTML_BASE, "Attributes", "<p>source</p>")

        HtmlEntriesFilter().get_entries("", context)
        cached = context.options["source_doc"]
        HtmlEntriesFilter().get_entries("", context)

        assert context.options["source_doc"] is cached
        assert cached.get_text() == "source"

    @pytest.mark.unit
    def test_html_site_policy(self):
        """Test seed URLs of the HTML reference."""
        assert html_site().policy.initial_urls() == [
            HTML_BASE,
            f"{HTML_BASE}/Element",
            f"{HTML_BASE}/Global_attributes",
        ]


class TestJavaScriptEntries:
    """Test the MDN JavaScript entry rules."""

    @pytest.mark.unit
    def test_breadcrumb_types(self):
        """Test typing from breadcrumbs with a fallback."""
        entries_filter = JavaScriptEntriesFilter()

        def entry_type(path: str, crumbs: str) -> str:
            source = f'<nav class="breadcrumbs-container">{crumbs}</nav>'
            html = f"<h1>{path.rsplit('/', 1)[-1]}</h1>"
            [entry] = entries_filter.get_entries(html, context_for(JS_BASE, path, source))
            return entry.type

        assert entry_type("Statements/for", "Reference / Statements") == "Statements"
        assert entry_type("Global_Objects/Array", "Reference / Global Objects") == "Objects"
        assert entry_type("Lexical_grammar", "Reference") == "Others"

    @pytest.mark.unit
    def test_initial_pages_skipped(self):
        """Test that the section index pages have no entry."""
        entries = JavaScriptEntriesFilter().get_entries(
            "<h1>Statements</h1>", context_for(JS_BASE, "Statements")
        )
        assert entries == []

    @pytest.mark.unit
    def test_moved_pages(self):
        """Test that renamed pages normalize to their current location."""
        policy = javascript_site().policy

        assert policy.normalize_url(f"{JS_BASE}/template_strings") == (
            f"{JS_BASE}/Template_literals"
        )
        assert not policy.should_process_url(f"{JS_BASE}/noSuchMethod")


class TestRustAndTypeScriptSites:
    """Test the Rust and TypeScript definitions."""

    @pytest.mark.unit
    def test_rust_seeds(self):
        """Test that each Rust book is seeded."""
        urls = rust_site().policy.initial_urls()

        assert urls[0] == "https://doc.rust-lang.org/"
        assert "https://doc.rust-lang.org/std/index.html" in urls
        assert "https://doc.rust-lang.org/cargo/index.html" in urls
        assert len(urls) == 6

    @pytest.mark.unit
    def test_typescript_seeds(self):
        """Test the handbook seeds under the docs base URL."""
        urls = typescript_site().policy.initial_urls()

        assert urls[0] == "https://www.typescriptlang.org/docs"
        assert "https://www.typescriptlang.org/docs/handbook/2/classes.html" in urls

    @pytest.mark.unit
    def test_links_rewritten_under_site_prefix(self, filter_registry: FilterRegistry):
        """Test that internal links point below each site's docs prefix."""
        cases = [
            (rust_site(), "https://doc.rust-lang.org/std/index.html", "/docs/rust/"),
            (
                typescript_site(),
                "https://www.typescriptlang.org/docs/handbook/intro.html",
                "/docs/typescript/",
            ),
        ]
        for site, url, prefix in cases:
            pipeline = site.build_pipeline(filter_registry)
            context = FilterContext(
                base_url=site.policy.base_url,
                current_url=url,
                current_path=site.policy.url_to_path(url),
            )
            html = (
                "<html><body><nav>menu</nav><h1>Page</h1>"
                '<a href="other.html">Other</a><footer>foot</footer></body></html>'
            )

            out = pipeline.run(html, context)

            assert "menu" not in out and "foot" not in out
            assert f'href="{prefix}' in out
            assert context.links == [url.rsplit("/", 1)[0] + "/other.html"]
