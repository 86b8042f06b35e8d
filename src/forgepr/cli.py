"""CLI entry point for forgepr.

This module provides the Typer-based CLI with commands:
- forgepr validate: Validate configuration
- forgepr create: Open a pull request (retried while the branch propagates)
- forgepr get: Show a pull request as JSON
- forgepr merge: Merge a pull request
- forgepr reopen: Reopen a closed pull request
- forgepr update: Change description, state or base branch

Exit codes:
- 0: Success
- 1: Configuration error
- 2: Authentication error
- 3: Invalid command usage
- 4: API or network failure
"""

from __future__ import annotations

import asyncio
import dataclasses
import json
from enum import IntEnum
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any, TypeVar

import httpx
import typer

from forgepr import __version__
from forgepr.analytics import LoggingAnalytics
from forgepr.config import ConfigError, load_config
from forgepr.github import (
    AuthenticationError,
    GitHubAPIError,
    GitHubClient,
    GitHubPrService,
    TransientError,
)
from forgepr.logging import configure_logging, get_logger
from forgepr.prs.models import CreatePullRequestArgs, MergeMethod, PrState

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from forgepr.config.schema import Config

T = TypeVar("T")


class ExitCode(IntEnum):
    """CLI exit codes."""

    SUCCESS = 0
    CONFIG_ERROR = 1
    AUTH_ERROR = 2
    USAGE_ERROR = 3
    API_ERROR = 4


app = typer.Typer(
    name="forgepr",
    help="Create, inspect, merge and update GitHub pull requests.",
    add_completion=False,
    no_args_is_help=True,
)

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Path to configuration file."),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable verbose output."),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"forgepr {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """forgepr - pull request gateway for GitHub."""


def _fail(message: str, code: ExitCode) -> typer.Exit:
    typer.echo(typer.style(f"✗ {message}", fg=typer.colors.RED), err=True)
    return typer.Exit(code)


def _load(config: Path | None, verbose: bool) -> Config:
    configure_logging(verbose=verbose, json_output=False)
    try:
        return load_config(config)
    except ConfigError as e:
        raise _fail(str(e), ExitCode.CONFIG_ERROR) from e


def _run(cfg: Config, operation: Callable[[GitHubPrService], Awaitable[T]]) -> T:
    """Build the service from config, run one operation and map errors to exit codes."""
    log = get_logger("forgepr.cli")

    async def runner() -> T:
        async with GitHubClient(
            cfg.github.token,
            base_url=cfg.github.base_url,
            timeout=cfg.github.timeout,
        ) as client:
            service = GitHubPrService(
                client,
                cfg.repository.to_repo_info(),
                cfg.repository.base_branch,
                analytics=LoggingAnalytics(),
                retry_policy=cfg.create_retry.to_policy(),
            )
            return await operation(service)

    try:
        return asyncio.run(runner())
    except AuthenticationError as e:
        raise _fail(str(e), ExitCode.AUTH_ERROR) from e
    except GitHubAPIError as e:
        log.debug("github_api_error", status_code=e.status_code, body=e.response_body)
        code = ExitCode.AUTH_ERROR if e.status_code == 401 else ExitCode.API_ERROR
        raise _fail(str(e), code) from e
    except (TransientError, httpx.HTTPError) as e:
        raise _fail(str(e), ExitCode.API_ERROR) from e


def _to_json(record: Any) -> str:
    return json.dumps(dataclasses.asdict(record), indent=2, default=str)


@app.command()
def validate(config: ConfigOption = None, verbose: VerboseOption = False) -> None:
    """Validate configuration without contacting GitHub."""
    cfg = _load(config, verbose)
    typer.echo(typer.style("✓ Configuration is valid", fg=typer.colors.GREEN))

    if verbose:
        typer.echo("\nConfiguration summary:")
        typer.echo(f"  Repository: {cfg.repository.owner}/{cfg.repository.name}")
        typer.echo(f"  Base branch: {cfg.repository.base_branch}")
        typer.echo(f"  API: {cfg.github.base_url}")
        typer.echo(
            f"  Create retries: {cfg.create_retry.max_attempts} attempts, "
            f"{cfg.create_retry.delay}s apart"
        )


@app.command()
def create(
    title: Annotated[str, typer.Option("--title", "-t", help="Pull request title.")],
    head: Annotated[str, typer.Option("--head", help="Branch holding the changes.")],
    base: Annotated[
        str | None,
        typer.Option("--base", help="Branch to merge into (default: configured base)."),
    ] = None,
    body: Annotated[str, typer.Option("--body", "-b", help="Pull request description.")] = "",
    draft: Annotated[bool, typer.Option("--draft", help="Open as a draft.")] = False,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Open a pull request."""
    cfg = _load(config, verbose)
    args = CreatePullRequestArgs(
        title=title,
        body=body,
        base_branch_name=base or cfg.repository.base_branch,
        upstream_name=head,
        draft=draft,
    )
    pr = _run(cfg, lambda service: service.create_pr(args))
    typer.echo(typer.style(f"✓ Opened #{pr.number}: {pr.html_url}", fg=typer.colors.GREEN))


@app.command()
def get(
    number: Annotated[int, typer.Argument(help="Pull request number.")],
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print a pull request as JSON."""
    cfg = _load(config, verbose)
    pr = _run(cfg, lambda service: service.get(number))
    typer.echo(_to_json(pr))


@app.command()
def merge(
    number: Annotated[int, typer.Argument(help="Pull request number.")],
    method: Annotated[
        MergeMethod,
        typer.Option("--method", "-m", help="Merge method."),
    ] = MergeMethod.MERGE,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Merge a pull request."""
    cfg = _load(config, verbose)
    _run(cfg, lambda service: service.merge(method, number))
    typer.echo(typer.style(f"✓ Merged #{number} ({method.value})", fg=typer.colors.GREEN))


@app.command()
def reopen(
    number: Annotated[int, typer.Argument(help="Pull request number.")],
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Reopen a closed pull request."""
    cfg = _load(config, verbose)
    _run(cfg, lambda service: service.reopen(number))
    typer.echo(typer.style(f"✓ Reopened #{number}", fg=typer.colors.GREEN))


@app.command()
def update(
    number: Annotated[int, typer.Argument(help="Pull request number.")],
    description: Annotated[
        str | None,
        typer.Option("--description", "-d", help="New description."),
    ] = None,
    state: Annotated[
        PrState | None,
        typer.Option("--state", "-s", help="New state."),
    ] = None,
    target_base: Annotated[
        str | None,
        typer.Option("--target-base", help="New base branch."),
    ] = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Update selected fields of a pull request."""
    if description is None and state is None and target_base is None:
        raise _fail(
            "Nothing to update: pass --description, --state or --target-base",
            ExitCode.USAGE_ERROR,
        )
    cfg = _load(config, verbose)
    _run(
        cfg,
        lambda service: service.update(
            number,
            description=description,
            state=state,
            target_base=target_base,
        ),
    )
    typer.echo(typer.style(f"✓ Updated #{number}", fg=typer.colors.GREEN))
