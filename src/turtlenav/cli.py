# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import json
from pathlib import Path

import click

from turtlenav.actuator.base import ItemStack
from turtlenav.config import NavigatorConfig, load_config
from turtlenav.errors import NavigationError
from turtlenav.logging import configure_logging
from turtlenav.navigation import Navigator, Pose, PositionStore
from turtlenav.operator import AutoAcknowledgeConsole
from turtlenav.settings import Settings
from turtlenav.simulation import COAL, build_tunnel_world, report, run_tunnel


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--state-root", type=click.Path(path_type=Path), default=None, help="Directory holding position records.")
@click.option("--log-level", default=None, help="Override TURTLENAV_LOG_LEVEL.")
@click.option("--log-format", type=click.Choice(["console", "json"]), default=None, help="Override TURTLENAV_LOG_FORMAT.")
@click.pass_context
def cli(ctx: click.Context, state_root: Path | None, log_level: str | None, log_format: str | None) -> None:
    """turtlenav command line interface."""
    overrides = {}
    if state_root is not None:
        overrides["state_root"] = state_root
    if log_level is not None:
        overrides["log_level"] = log_level
    if log_format is not None:
        overrides["log_format"] = log_format
    settings = Settings(**overrides)
    configure_logging(settings)
    ctx.obj = settings


@cli.command("status")
@click.option("--key", default="position", show_default=True, help="Storage key of the position record.")
@click.pass_obj
def status(settings: Settings, key: str) -> None:
    """Print the persisted position record as JSON."""
    store = PositionStore(settings.state_root)
    try:
        if not store.exists(key):
            raise click.ClickException(f"No position record for {key!r} in {settings.state_root}")
        record = store.read_record(key)
    except NavigationError as e:
        raise click.ClickException(str(e)) from e
    click.echo(json.dumps(record, indent=2))


@cli.group("config")
def config_group() -> None:
    """Navigator configuration files."""


@config_group.command("init")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
def config_init(path: Path, force: bool) -> None:
    """Write the default navigator configuration as YAML."""
    if path.exists() and not force:
        raise click.ClickException(f"{path} already exists (use --force to overwrite)")
    NavigatorConfig().to_yaml(path)
    click.echo(f"Wrote {path}")


@cli.command("simulate")
@click.option("--length", type=click.IntRange(min=1), default=8, show_default=True)
@click.option("--width", type=click.IntRange(min=1), default=3, show_default=True)
@click.option("--fuel", type=click.IntRange(min=0), default=20, show_default=True, help="Starting fuel.")
@click.option("--stack-limit", type=click.IntRange(min=1), default=64, show_default=True)
@click.option("--key", default="simulation", show_default=True, help="Storage key of the position record.")
@click.option("--reset", is_flag=True, help="Discard any record left by an interrupted run.")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None)
@click.pass_obj
def simulate(
    settings: Settings,
    length: int,
    width: int,
    fuel: int,
    stack_limit: int,
    key: str,
    reset: bool,
    config_path: Path | None,
) -> None:
    """Dig a tunnel with a simulated turtle, diverting home as needed.

    The simulated world always starts with the turtle at home, so a record
    left away from the origin by an interrupted run must be reset first.
    """
    config = load_config(config_path or settings.config_path)
    actuator, drop_chest, fuel_chest = build_tunnel_world(
        length=length,
        width=width,
        fuel=fuel,
        stack_limit=stack_limit,
        config=config,
    )

    def play_operator(action_label: str) -> None:
        click.echo(f"{action_label} unsuccessful. Operator resolving...")
        if action_label == "Refuel":
            fuel_chest.put(ItemStack(name=COAL, count=64))

    navigator = Navigator(
        actuator,
        PositionStore(settings.state_root),
        console=AutoAcknowledgeConsole(on_request=play_operator),
        config=config,
    )
    try:
        if reset:
            navigator.store.discard(key)
        position = navigator.create_or_load(key)
        if position.current != Pose():
            raise click.ClickException(
                f"Record {key!r} is at {position.current.summary()}; rerun with --reset"
            )
        run_tunnel(navigator, position, length=length, width=width)
    except NavigationError as e:
        raise click.ClickException(str(e)) from e

    result = report(navigator, position, drop_chest)
    click.echo(f"Finished at {result.current}")
    click.echo(f"Fuel left: {result.fuel}")
    click.echo(f"Diversions: {result.diversions}")
    click.echo(f"Operator pauses: {result.pauses}")
    click.echo(f"Blocks delivered: {result.dropped}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
