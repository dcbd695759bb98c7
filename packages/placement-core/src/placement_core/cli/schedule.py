"""Scheduling CLI commands.

This module provides CLI commands that run the division core on JSON
request files:
- divide: Divide a prepared request (capacities, seed, target)
- scale-up: Place the extra replicas of a binding on top of its placement
- scale-down: Re-divide a smaller total proportionally to the placement
- assign: Run the full assignment for candidates, placement and binding
- weights: Show the static weight list a placement resolves to

Patterns:
- Use typer.Typer() subcommand group
- Rich Table for formatted output, JSON for automation
- Division errors print the reason and exit with code 1
"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import NoReturn, TypeVar

import typer
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.table import Table

from placement_protocols import ClusterWeightInfo, TargetCluster

from placement_core.assignment import assign_replicas, new_assign_state
from placement_core.config import settings
from placement_core.division import dynamic_divide_replicas, dynamic_scale_down, dynamic_scale_up
from placement_core.errors import DivisionError
from placement_core.schemas import AssignmentRequest, DivisionRequest
from placement_core.static_weight import (
    get_default_weight_preference,
    get_static_weight_info_list,
)
from placement_core.weights import sum_replicas

logger = logging.getLogger(__name__)

schedule_app = typer.Typer(help="Divide replicas across member clusters")

RequestT = TypeVar("RequestT", bound=BaseModel)


def _load_request(path: Path, model: type[RequestT]) -> RequestT:
    """Parse a request file, exiting with code 1 if it is invalid."""
    try:
        return model.model_validate_json(path.read_text())
    except OSError as e:
        print(f"Cannot read {path}: {e}")
        raise typer.Exit(1)
    except ValidationError as e:
        print(f"Invalid request {path}:\n{e}")
        raise typer.Exit(1)


def _print_placement(result: list[TargetCluster], title: str, json_output: bool) -> None:
    """Print a placement as JSON or as a Rich table."""
    if json_output or settings.json_output:
        print(json.dumps([asdict(c) for c in result], indent=2))
        return

    console = Console()
    table = Table(title=title, caption=f"Total: {sum_replicas(result)} replicas")
    table.add_column("Cluster", style="cyan")
    table.add_column("Replicas", justify="right", style="green")
    for cluster in result:
        table.add_row(cluster.name, str(cluster.replicas))
    console.print(table)


def _print_weights(weights: list[ClusterWeightInfo], json_output: bool) -> None:
    if json_output or settings.json_output:
        print(json.dumps([asdict(w) for w in weights], indent=2))
        return

    console = Console()
    table = Table(title="Static weights")
    table.add_column("Cluster", style="cyan")
    table.add_column("Weight", justify="right")
    for info in weights:
        table.add_row(info.cluster_name, str(info.weight))
    console.print(table)


def _fail(error: DivisionError) -> NoReturn:
    logger.warning(f"Division failed: {error}")
    print(f"Error: {error}")
    raise typer.Exit(1)


@schedule_app.command("divide")
def divide(
    request_file: Path = typer.Argument(..., help="Division request JSON file"),
    json_output: bool = typer.Option(
        False, "--json", "-j", help="Output as JSON"
    ),
) -> None:
    """Divide target replicas over the available clusters."""
    request = _load_request(request_file, DivisionRequest)
    state = request.to_state(settings.default_strategy)
    try:
        result = dynamic_divide_replicas(state)
    except DivisionError as e:
        _fail(e)
    _print_placement(result, f"Placement ({state.strategy_type.value})", json_output)


@schedule_app.command("scale-up")
def scale_up(
    request_file: Path = typer.Argument(..., help="Assignment request JSON file"),
    json_output: bool = typer.Option(
        False, "--json", "-j", help="Output as JSON"
    ),
) -> None:
    """Place the extra replicas on top of the previous placement."""
    request = _load_request(request_file, AssignmentRequest)
    try:
        state = new_assign_state(
            request.to_clusters(), request.placement.to_placement(), request.spec.to_spec()
        )
        state.build_scheduled_clusters()
        result = dynamic_scale_up(state, [request.estimator()])
    except DivisionError as e:
        _fail(e)
    _print_placement(result, "Placement after scale up", json_output)


@schedule_app.command("scale-down")
def scale_down(
    request_file: Path = typer.Argument(..., help="Assignment request JSON file"),
    json_output: bool = typer.Option(
        False, "--json", "-j", help="Output as JSON"
    ),
) -> None:
    """Shrink the previous placement proportionally."""
    request = _load_request(request_file, AssignmentRequest)
    try:
        state = new_assign_state(
            request.to_clusters(), request.placement.to_placement(), request.spec.to_spec()
        )
        result = dynamic_scale_down(state)
    except DivisionError as e:
        _fail(e)
    _print_placement(result, "Placement after scale down", json_output)


@schedule_app.command("assign")
def assign(
    request_file: Path = typer.Argument(..., help="Assignment request JSON file"),
    json_output: bool = typer.Option(
        False, "--json", "-j", help="Output as JSON"
    ),
) -> None:
    """Run the full replica assignment for a binding."""
    request = _load_request(request_file, AssignmentRequest)
    try:
        result = assign_replicas(
            request.to_clusters(),
            request.placement.to_placement(),
            request.spec.to_spec(),
            estimators=[request.estimator()],
        )
    except DivisionError as e:
        _fail(e)
    _print_placement(result, "Placement", json_output)


@schedule_app.command("weights")
def weights(
    request_file: Path = typer.Argument(..., help="Assignment request JSON file"),
    json_output: bool = typer.Option(
        False, "--json", "-j", help="Output as JSON"
    ),
) -> None:
    """Show the static weight of each candidate cluster."""
    request = _load_request(request_file, AssignmentRequest)
    clusters = request.to_clusters()
    strategy = request.placement.to_placement().replica_scheduling
    preference = strategy.weight_preference if strategy else None
    if preference is None:
        preference = get_default_weight_preference(clusters)
    _print_weights(get_static_weight_info_list(clusters, preference.static_weight_list), json_output)
