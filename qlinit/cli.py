"""
cli.py - Command-line interface for qlinit

This module provides the command-line interface for the qlinit tool,
resolving the analysis configuration for a run and the resource flags
CodeQL should be started with.
"""

import json
import os
import sys
import tempfile
from typing import List, Optional

import click
import requests

from .core import (
    CodeQLCommand,
    CodeQLError,
    QlinitError,
    get_config,
    get_languages,
    init_config,
    parse_repository_nwo,
)
from .core.languages import is_traced_language
from .utils.file_handler import find_repository_root
from .utils.logger import get_runner_logger
from .utils.resources import get_memory_flag, get_threads_flag
from .utils.settings import ActionSettings, get_extra_options, prepare_local_run_environment
from .utils.version import __version__
from .utils.yaml_handler import dump_yaml

OUTPUT_FORMATS = ["text", "json", "yaml"]


def _load_settings() -> ActionSettings:
    prepare_local_run_environment()
    try:
        return ActionSettings.from_env()
    except QlinitError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)


def _default_checkout_path(settings: ActionSettings) -> str:
    if settings.workspace:
        return settings.workspace
    return find_repository_root(os.getcwd()) or os.getcwd()


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """qlinit - CodeQL analysis initialization

    Resolves languages, queries and path filters for a CodeQL run.
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.option("--languages", help="Comma separated languages to analyze (default: auto-detect)")
@click.option("--queries", help="Comma separated queries to run in addition to the config")
@click.option("--config-file", help="Config file path in the checkout, or owner/repo/path@ref")
@click.option("--codeql", "codeql_path", default="codeql", show_default=True, help="CodeQL executable")
@click.option("--checkout-path", type=click.Path(file_okay=False), help="Repository checkout root")
@click.option("--temp-dir", type=click.Path(file_okay=False), help="Working directory for this run")
@click.option("--tool-cache-dir", type=click.Path(file_okay=False), help="Tool cache directory")
@click.option("--repository", help="Repository as owner/repo, for language detection")
@click.option("--token", envvar="GITHUB_TOKEN", help="GitHub token")
@click.option("--github-url", help="URL of the GitHub instance")
@click.option("--debug", is_flag=True, help="Show debug output")
def init(
    languages: Optional[str],
    queries: Optional[str],
    config_file: Optional[str],
    codeql_path: str,
    checkout_path: Optional[str],
    temp_dir: Optional[str],
    tool_cache_dir: Optional[str],
    repository: Optional[str],
    token: Optional[str],
    github_url: Optional[str],
    debug: bool,
) -> None:
    """Resolve and save the analysis configuration

    Options not given on the command line are taken from the action inputs
    and runner environment.
    """
    settings = _load_settings()
    logger = get_runner_logger(debug)

    checkout_path = checkout_path or _default_checkout_path(settings)
    temp_dir = temp_dir or settings.temp_dir or tempfile.gettempdir()
    tool_cache_dir = tool_cache_dir or settings.tool_cache_dir or temp_dir
    token = token or settings.token
    github_url = github_url or settings.github_url

    languages_input = languages if languages is not None else settings.languages
    queries_input = queries if queries is not None else settings.queries
    config_input = config_file if config_file is not None else settings.config_file

    try:
        repo_nwo = None
        if repository or settings.repository:
            repo_nwo = parse_repository_nwo(repository or settings.repository)

        parsed_languages = get_languages(languages_input, repo_nwo, token, github_url, logger=logger)
        config = init_config(
            parsed_languages,
            queries_input or None,
            config_input or None,
            temp_dir,
            tool_cache_dir,
            CodeQLCommand(codeql_path),
            checkout_path,
            token,
            github_url,
            logger,
        )
    except (QlinitError, CodeQLError, ValueError, requests.RequestException) as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    click.echo("✅ Configuration resolved.")
    for language in config.languages:
        kind = "traced" if is_traced_language(language) else "scanned"
        click.echo(f" - {language.value} ({kind}): {len(config.queries.get(language.value, []))} queries")
    if config.paths:
        click.echo(f"   paths: {', '.join(config.paths)}")
    if config.paths_ignore:
        click.echo(f"   paths-ignore: {', '.join(config.paths_ignore)}")


@cli.command("show-config")
@click.option("--temp-dir", type=click.Path(file_okay=False), help="Working directory of the run")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default="text",
    help="Output format",
)
def show_config(temp_dir: Optional[str], output_format: str) -> None:
    """Show the configuration saved by init"""
    settings = _load_settings()
    temp_dir = temp_dir or settings.temp_dir or tempfile.gettempdir()

    config = get_config(temp_dir)
    if config is None:
        click.echo(f"No configuration has been initialized in {temp_dir}", err=True)
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps(config.to_dict(), indent=2, default=str))
        return
    if output_format == "yaml":
        click.echo(dump_yaml(config.to_dict()))
        return

    click.echo(f"Languages: {', '.join(language.value for language in config.languages)}")
    for language, queries in config.queries.items():
        click.echo(f"\n{language.upper()}:")
        for query in queries:
            click.echo(f" - {query}")
    click.echo(f"\nPaths: {', '.join(config.paths) or '(all)'}")
    click.echo(f"Paths ignored: {', '.join(config.paths_ignore) or '(none)'}")
    click.echo(f"CodeQL: {config.codeql_cmd}")


@cli.command()
@click.option("--ram", help="Megabytes of RAM CodeQL may use (default: all but 256MB)")
@click.option("--threads", help="Threads CodeQL may use; 0 means one per core")
@click.option(
    "--command",
    "command_path",
    default="",
    help="CodeQL subcommand to include extra options for, e.g. 'database init'",
)
def flags(ram: Optional[str], threads: Optional[str], command_path: str) -> None:
    """Print the CodeQL command-line flags for this host"""
    settings = _load_settings()

    try:
        output: List[str] = [
            get_memory_flag(ram if ram is not None else settings.ram),
            get_threads_flag(threads if threads is not None else settings.threads),
        ]
        if command_path:
            output.extend(get_extra_options(settings.extra_options, command_path.split()))
    except QlinitError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    click.echo(" ".join(output))


if __name__ == "__main__":
    cli()
