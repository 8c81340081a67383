"""
CLI interface for SEO Boost.

Provides command-line access to generation, URL checks, backend health and
usage statistics.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from seo_boost.config.loader import ClientConfig, load_client_config
from seo_boost.core.connectivity import ConnectionStatus, ConnectivityMonitor
from seo_boost.core.errors import LinkCheckError, UsageStatsError
from seo_boost.core.markdown import format_results_as_markdown
from seo_boost.core.models import META_DESCRIPTION_LIMIT, META_TITLE_LIMIT, SEOResult
from seo_boost.core.orchestrator import GenerationOrchestrator, Notice
from seo_boost.core.providers import PROVIDER_TABLE, AIProvider
from seo_boost.core.usage import UsageAccountant, format_tokens
from seo_boost.sdk.generation_client import GenerationClient
from seo_boost.sdk.health import check_backend_health
from seo_boost.sdk.http import create_http_client
from seo_boost.sdk.link_checker import LinkLivenessChecker
from seo_boost.sdk.usage_stats import fetch_usage_stats

app = typer.Typer()
console = Console()

EXIT_CODE_PASS = 0
EXIT_CODE_FAIL = 1

API_KEY_ENV = "SEO_BOOST_API_KEY"

_STATUS_STYLES = {
    ConnectionStatus.CHECKING: "[yellow]● checking[/]",
    ConnectionStatus.CONNECTED: "[green]● connected[/]",
    ConnectionStatus.DISCONNECTED: "[red]● disconnected[/]",
}

_NOTICE_STYLES = {
    "success": "green",
    "info": "blue",
    "warning": "yellow",
    "error": "red",
}


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a YAML configuration file"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging"
    )
):
    """SEO Boost CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )

    try:
        ctx.obj = load_client_config(config_path)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Configuration error:[/] {e}")
        sys.exit(EXIT_CODE_FAIL)

    if ctx.invoked_subcommand is None:
        console.print("SEO Boost - Use --help to see available commands")


@app.command()
def providers():
    """List supported AI providers and their models."""
    table = Table(title="AI Providers")
    table.add_column("Provider")
    table.add_column("Company")
    table.add_column("Default model")
    table.add_column("Models")
    table.add_column("Key format")

    for info in PROVIDER_TABLE.providers.values():
        table.add_row(
            f"{info.name} ({info.id.value})",
            info.company,
            info.default_model,
            "\n".join(m.id for m in info.models),
            info.placeholder,
        )
    console.print(table)


@app.command()
def health(
    ctx: typer.Context,
    watch: bool = typer.Option(
        False,
        "--watch",
        "-w",
        help="Keep polling and print every status change"
    )
):
    """Check whether the backend is reachable."""
    config: ClientConfig = ctx.obj
    try:
        status = asyncio.run(_run_health(config, watch))
    except KeyboardInterrupt:
        sys.exit(EXIT_CODE_PASS)

    console.print(f"Backend {config.backend_url}: {_STATUS_STYLES[status]}")
    sys.exit(EXIT_CODE_PASS if status is ConnectionStatus.CONNECTED else EXIT_CODE_FAIL)


@app.command("check-urls")
def check_urls(
    ctx: typer.Context,
    url_file: Path = typer.Argument(..., help="Text file with one URL per line")
):
    """Check which URLs in a list are live."""
    config: ClientConfig = ctx.obj
    urls = _load_urls_or_exit(url_file)

    try:
        statuses = asyncio.run(_run_check_urls(config, urls))
    except LinkCheckError as e:
        console.print(f"[red]URL check unavailable:[/] {e}")
        sys.exit(EXIT_CODE_FAIL)

    table = Table(title=f"URL liveness ({len(urls)} URLs)")
    table.add_column("URL")
    table.add_column("Status")
    for url in urls:
        is_live = statuses.get(url)
        label = "[green]live[/]" if is_live else ("[red]dead[/]" if is_live is False else "[dim]unknown[/]")
        table.add_row(url, label)
    console.print(table)
    sys.exit(EXIT_CODE_PASS)


@app.command()
def generate(
    ctx: typer.Context,
    content_file: Path = typer.Option(
        ...,
        "--content-file",
        "-f",
        help="Text file with the article content"
    ),
    keyword: str = typer.Option(
        ...,
        "--keyword",
        "-k",
        help="Primary keyword"
    ),
    urls_file: Path = typer.Option(
        ...,
        "--urls-file",
        "-u",
        help="Text file with candidate internal-link URLs, one per line"
    ),
    provider: AIProvider = typer.Option(
        ...,
        "--provider",
        "-p",
        help="AI provider"
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Model id (defaults to the provider's default model)"
    ),
    api_key: Optional[str] = typer.Option(
        None,
        "--api-key",
        envvar=API_KEY_ENV,
        help=f"Provider API key (or set {API_KEY_ENV})",
        show_default=False,
    ),
    markdown: bool = typer.Option(
        False,
        "--markdown",
        help="Print the result as Markdown"
    )
):
    """Generate SEO headings, paragraphs, meta tags and internal links."""
    config: ClientConfig = ctx.obj

    try:
        content = content_file.read_text(encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Could not read content file:[/] {e}")
        sys.exit(EXIT_CODE_FAIL)
    urls = _load_urls_or_exit(urls_file)

    if not api_key:
        api_key = typer.prompt(f"{provider.value} API key", hide_input=True)

    orchestrator = asyncio.run(_run_generate(
        config, content, keyword, urls, urls_file.name, provider, model, api_key
    ))

    if orchestrator.session.settings_requested:
        console.print("[yellow]Check --provider, --api-key and --urls-file, then run again.[/]")
        orchestrator.close_settings()

    result = orchestrator.session.result
    if result is None:
        sys.exit(EXIT_CODE_FAIL)

    if markdown:
        console.print(format_results_as_markdown(result), markup=False, highlight=False)
    else:
        _display_result(result)
    _display_session_usage(orchestrator.accountant)
    sys.exit(EXIT_CODE_PASS)


@app.command()
def stats(ctx: typer.Context):
    """Show historical usage statistics from the backend."""
    config: ClientConfig = ctx.obj
    try:
        snapshot = asyncio.run(_run_stats(config))
    except UsageStatsError as e:
        console.print(f"[red]Error:[/] {e}")
        sys.exit(EXIT_CODE_FAIL)

    console.print(
        f"\n[bold]All-time usage:[/] {snapshot.total_requests} requests, "
        f"{format_tokens(snapshot.total_tokens)} tokens"
    )
    if not snapshot.providers:
        console.print("[dim]No usage recorded yet.[/]")
        sys.exit(EXIT_CODE_PASS)

    table = Table()
    table.add_column("Provider")
    table.add_column("Model")
    table.add_column("Requests", justify="right")
    table.add_column("Tokens", justify="right")
    for usage in snapshot.providers:
        table.add_row(usage.provider, "[dim]all[/]", str(usage.requests), format_tokens(usage.total_tokens))
        for model_usage in usage.models:
            table.add_row(
                "", model_usage.model, str(model_usage.requests), format_tokens(model_usage.total_tokens)
            )
    console.print(table)
    sys.exit(EXIT_CODE_PASS)


def load_url_list(path: Path) -> List[str]:
    """Read http(s) URLs from a text file, one per line.

    Blank lines, ``#`` comments and non-http(s) entries are skipped.
    """
    urls = []
    for line in path.read_text(encoding="utf-8").splitlines():
        value = line.strip()
        if value.startswith("http://") or value.startswith("https://"):
            urls.append(value)
    return urls


def _load_urls_or_exit(path: Path) -> List[str]:
    try:
        urls = load_url_list(path)
    except OSError as e:
        console.print(f"[red]Could not read URL file:[/] {e}")
        sys.exit(EXIT_CODE_FAIL)
    if not urls:
        console.print("[red]No URLs found.[/] Ensure URLs start with http:// or https://.")
        sys.exit(EXIT_CODE_FAIL)
    return urls


async def _run_health(config: ClientConfig, watch: bool) -> ConnectionStatus:
    async with create_http_client(config) as http:
        monitor = ConnectivityMonitor(
            lambda: check_backend_health(http),
            interval=config.health_poll_interval,
            timeout=config.health_timeout,
            on_change=_print_status if watch else None,
        )
        if not watch:
            return await monitor.check()

        async with monitor:
            await asyncio.Event().wait()
        return monitor.status


async def _run_check_urls(config: ClientConfig, urls: List[str]):
    async with create_http_client(config) as http:
        return await LinkLivenessChecker(http).check(urls)


async def _run_generate(
    config: ClientConfig,
    content: str,
    keyword: str,
    urls: List[str],
    url_source: str,
    provider: AIProvider,
    model: Optional[str],
    api_key: str,
) -> GenerationOrchestrator:
    async with create_http_client(config) as http:
        accountant = UsageAccountant(lambda: fetch_usage_stats(http, config.usage_stats_path))
        orchestrator = GenerationOrchestrator(
            GenerationClient(http),
            LinkLivenessChecker(http),
            accountant,
            min_content_words=config.min_content_words,
            notify=_print_notice,
        )
        orchestrator.set_provider(provider)
        if model:
            orchestrator.set_model(model)
        orchestrator.set_api_key(api_key)
        orchestrator.set_urls(urls, url_source)
        orchestrator.set_content(content)
        orchestrator.set_keyword(keyword)

        with console.status(f"Sending to {PROVIDER_TABLE.get_provider(provider).name}..."):
            await orchestrator.generate()
        await orchestrator.wait_for_background()
        return orchestrator


async def _run_stats(config: ClientConfig):
    async with create_http_client(config) as http:
        return await fetch_usage_stats(http, config.usage_stats_path)


def _print_status(status: ConnectionStatus) -> None:
    console.print(f"Backend: {_STATUS_STYLES[status]}")


def _print_notice(notice: Notice) -> None:
    style = _NOTICE_STYLES.get(notice.level, "white")
    message = f"[{style}]{notice.title}[/]"
    if notice.description:
        message += f" - {notice.description}"
    console.print(message)


def _display_result(result: SEOResult) -> None:
    """Display the generated result section by section."""
    console.print(f"\n[bold]H2:[/] {result.h2}")
    console.print(result.paragraph1)
    console.print(f"\n[bold]H3:[/] {result.h3}")
    console.print(result.paragraph2)

    title_style = "green" if result.meta_title_within_limit else "yellow"
    desc_style = "green" if result.meta_description_within_limit else "yellow"
    console.print(
        f"\n[bold]Meta title:[/] {result.meta_title} "
        f"[{title_style}]({len(result.meta_title)}/{META_TITLE_LIMIT})[/]"
    )
    console.print(
        f"[bold]Meta description:[/] {result.meta_description} "
        f"[{desc_style}]({len(result.meta_description)}/{META_DESCRIPTION_LIMIT})[/]"
    )

    table = Table(title="Internal links")
    table.add_column("#", justify="right")
    table.add_column("Anchor text")
    table.add_column("URL")
    for i, link in enumerate(result.internal_links, start=1):
        table.add_row(str(i), link.anchor_text, link.url)
    console.print(table)

    console.print(f"[bold]Placement:[/] {result.placement_recommendation}")


def _display_session_usage(accountant: UsageAccountant) -> None:
    console.print(
        f"\n[dim]Session: {accountant.total_session_requests} request(s), "
        f"{format_tokens(accountant.total_session_tokens)} tokens[/]"
    )
    snapshot = accountant.snapshot
    if snapshot is not None:
        console.print(
            f"[dim]All-time: {snapshot.total_requests} request(s), "
            f"{format_tokens(snapshot.total_tokens)} tokens[/]"
        )


if __name__ == "__main__":
    app()
