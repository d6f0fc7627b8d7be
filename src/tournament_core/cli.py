"""CLI entry point for the tournament core."""

from __future__ import annotations

import json
import sys

import click

from .core.config import load_settings
from .core.errors import ConfigError, TournamentError
from .domain.status import EnrollmentStatus, MatchStatus, RoundStatus
from .observability.logger import setup_logging

_MACHINES = {
    "enrollment": EnrollmentStatus,
    "match": MatchStatus,
    "round": RoundStatus,
}


@click.group()
@click.option("--config", "config_path", default=None, help="Config file path")
@click.option("--log-level", default=None, help="Log level (overrides config)")
@click.option(
    "--log-format",
    type=click.Choice(["json", "console"]),
    default=None,
    help="Log output format (overrides config)",
)
def main(config_path: str | None, log_level: str | None, log_format: str | None) -> None:
    """Tournament domain tooling."""
    try:
        settings = load_settings(config_path=config_path)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    obs = settings.observability
    setup_logging(
        level=log_level or obs.log_level,
        format=log_format or obs.log_format.value,
    )


@main.command()
@click.argument("machine", type=click.Choice(sorted(_MACHINES)))
def transitions(machine: str) -> None:
    """Print the transition table for MACHINE."""
    status_cls = _MACHINES[machine]
    for status in status_cls:
        targets = sorted(s.value for s in status.allowed_transitions)
        suffix = "  (final)" if status.is_final else ""
        click.echo(f"{status.value:<16} -> {', '.join(targets) or '-'}{suffix}")


@main.command("check-enrollment")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, allow_dash=True))
def check_enrollment(path: str) -> None:
    """Decode an enrollment JSON record and print its simple view."""
    from .application.assemblers import EnrollmentAssembler
    from .infrastructure.mappers import EnrollmentMapper

    with click.open_file(path, "r") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            click.echo(f"Error: invalid JSON: {exc}", err=True)
            sys.exit(1)

    try:
        enrollment = EnrollmentMapper.to_domain(raw)
    except TournamentError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    view = EnrollmentAssembler.to_simple_view(enrollment, raw)
    click.echo(json.dumps(view, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
