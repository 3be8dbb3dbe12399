"""
Command line interface: list sites, scrape one, rebuild the manifest.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.traceback import install

from . import __version__
from .config import DocsCrawlerSettings, get_settings
from .core.orchestrator import DocsService
from .exceptions import DocsCrawlerError
from .models.crawl import CrawlStatus

logger = logging.getLogger(__name__)
console = Console()


def setup_logging(config: DocsCrawlerSettings | None = None) -> None:
    """Configure rich colorized logging for the application."""
    config = config or get_settings()

    install(show_locals=config.debug)

    rich_handler = RichHandler(
        console=Console(stderr=True),
        show_path=config.debug,
        show_time=True,
        rich_tracebacks=True,
        tracebacks_show_locals=config.debug,
        markup=False,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[rich_handler],
        force=True,
    )

    if config.log_to_file and config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logging.getLogger().addHandler(file_handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docs-crawler",
        description="Crawl documentation websites into pages and a searchable index.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--output", "-o", help="Docs directory (default: DOCS_PATH setting)"
    )
    parser.add_argument("--log-level", help="Override LOG_LEVEL")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List the documentation sites that can be scraped")

    scrape = subparsers.add_parser("scrape", help="Crawl one documentation site")
    scrape.add_argument("slug", help="Site slug, e.g. babel")
    scrape.add_argument("--doc-version", dest="doc_version", help="Documentation version")
    scrape.add_argument(
        "--concurrency", "-c", type=int, help="Maximum concurrent requests"
    )

    subparsers.add_parser("manifest", help="Rebuild manifest.json from the docs directory")
    return parser


def _settings_from_args(args: argparse.Namespace) -> DocsCrawlerSettings:
    overrides = {}
    if args.output:
        overrides["docs_path"] = args.output
    if args.log_level:
        overrides["log_level"] = args.log_level
    config = get_settings()
    return config.model_copy(update=overrides) if overrides else config


def cmd_list(service: DocsService) -> int:
    table = Table(title="Documentation sites")
    table.add_column("Slug", style="cyan")
    table.add_column("Name")
    table.add_column("Release")
    table.add_column("Base URL", style="dim")
    for site in service.list_sites():
        table.add_row(site.slug, site.name, site.release or "-", site.policy.base_url)
    console.print(table)
    return 0


async def cmd_scrape(
    service: DocsService, slug: str, version: str | None, concurrency: int | None
) -> int:
    result, meta = await service.scrape(slug, version, max_concurrency=concurrency)
    stats = result.statistics
    if result.status != CrawlStatus.COMPLETED:
        console.print(f"[red]Scrape of {slug} failed[/red]")
        for error in result.errors:
            console.print(f"  [red]{error}[/red]")
        return 1

    console.print(
        f"[green]{meta.name}[/green]: {len(result.pages)} pages, "
        f"{len(result.index)} entries, {stats.total_pages_failed} failed, "
        f"{stats.total_redirects} redirects in {stats.crawl_duration_seconds:.1f}s"
    )
    return 0


def cmd_manifest(service: DocsService) -> int:
    manifest = service.generate_manifest()
    console.print(
        f"Manifest written to {service.docs_dir / 'manifest.json'} "
        f"({len(manifest.docs)} documentation sets)"
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = _settings_from_args(args)
    setup_logging(config)
    service = DocsService(config)

    try:
        if args.command == "list":
            return cmd_list(service)
        if args.command == "scrape":
            return asyncio.run(
                cmd_scrape(service, args.slug, args.doc_version, args.concurrency)
            )
        if args.command == "manifest":
            return cmd_manifest(service)
    except DocsCrawlerError as e:
        console.print(f"[red]Error:[/red] {e}")
        logger.debug("Command failed", exc_info=True)
        return 1
    except KeyboardInterrupt:
        console.print("[yellow]Interrupted[/yellow]")
        return 130
    return 2


if __name__ == "__main__":
    sys.exit(main())
