"""CLI entry point - Click commands for products-api."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import sys

import click

from products_api import __version__
from products_api.cli._output import (
    format_outcome_json,
    format_outcome_text,
    format_rules_json,
    format_rules_text,
)
from products_api.cli._payload import PayloadError, load_instance
from products_api.core.config import BUILTIN_PROFILES, ApiConfig, ConfigError, load_config
from products_api.core.engine import validate as run_ruleset
from products_api.core.registry import create_default_registry

_config_option = click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=False),
    help="Path to .products-api.toml or pyproject.toml config file.",
)
_profile_option = click.option(
    "--profile",
    type=click.Choice(list(BUILTIN_PROFILES)),
    default=None,
    help="Settings profile (overrides config file profile).",
)


def _load(config_path: str | None, profile: str | None) -> ApiConfig:
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        click.echo(f"Error: invalid config: {exc}", err=True)
        sys.exit(2)

    if profile is not None:
        base = BUILTIN_PROFILES[profile]
        # --profile only swaps the simulated latencies; server settings stay.
        config = dataclasses.replace(
            config,
            service_delay=base.service_delay,
            rule_delay=base.rule_delay,
        )
    return config


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-V", "--version", message="products-api %(version)s")
def cli() -> None:
    """products-api - product endpoints with request validation."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default from config).")
@click.option("--port", default=None, type=int, help="Bind port (default from config).")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["critical", "error", "warning", "info", "debug"]),
    help="Log level (default from config).",
)
@_config_option
@_profile_option
def serve(
    host: str | None,
    port: int | None,
    log_level: str | None,
    config_path: str | None,
    profile: str | None,
) -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    from products_api.app import create_app

    config = _load(config_path, profile)
    overrides = {
        k: v for k, v in {"host": host, "port": port, "log_level": log_level}.items() if v
    }
    try:
        config = dataclasses.replace(config, **overrides)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    logging.basicConfig(
        level=config.logging_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(create_app(config), host=config.host, port=config.port, log_level=config.log_level)


@cli.command()
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format.",
)
@click.option("--no-color", is_flag=True, envvar="NO_COLOR", help="Disable ANSI colors.")
def rules(fmt: str, no_color: bool) -> None:
    """List registered validation rulesets."""
    registry = create_default_registry()
    if fmt == "json":
        click.echo(format_rules_json(registry.rulesets))
    else:
        click.echo(format_rules_text(registry.rulesets, no_color=no_color))


@cli.command("validate")
@click.argument("name")
@click.argument("payload", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format.",
)
@click.option("--no-color", is_flag=True, envvar="NO_COLOR", help="Disable ANSI colors.")
@_config_option
@_profile_option
def validate_payload(
    name: str,
    payload: str,
    fmt: str,
    no_color: bool,
    config_path: str | None,
    profile: str | None,
) -> None:
    """Validate a JSON PAYLOAD file against the ruleset called NAME."""
    config = _load(config_path, profile)
    registry = create_default_registry(config)

    ruleset = registry.find(name)
    if ruleset is None:
        known = ", ".join(rs.name for rs in registry.rulesets)
        click.echo(f"Error: unknown ruleset {name!r}. Known rulesets: {known}", err=True)
        sys.exit(2)

    try:
        instance = load_instance(ruleset.target, payload)
    except PayloadError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    outcome = asyncio.run(run_ruleset(ruleset, instance, concurrent=config.concurrent_rules))

    if fmt == "json":
        click.echo(format_outcome_json(outcome))
    else:
        click.echo(format_outcome_text(ruleset.name, outcome, no_color=no_color))

    if not outcome.is_valid:
        sys.exit(1)
