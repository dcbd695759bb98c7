"""
Dynamic replica division and scaling transitions.

This module turns an AssignState into a placement:
- dynamic_divide_replicas: Feasibility gate plus one weighted take, with
  the aggregated strategy narrowing the candidate set first
- dynamic_scale_down: Re-divide a smaller total proportionally to the
  previous placement
- dynamic_scale_up: Divide only the extra replicas over remaining capacity
  and add them on top of the previous placement

Nothing here logs or performs I/O; failures are raised as DivisionError
subclasses and no partial placement is ever returned.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from placement_protocols import CapacityEstimatorProtocol, Cluster, TargetCluster

from placement_core.dispenser import new_dispenser
from placement_core.errors import InsufficientCapacityError, UnknownStrategyError
from placement_core.estimator import cal_available_replicas
from placement_core.static_weight import get_static_weight_info_list_by_target_clusters
from placement_core.types import BindingSpec, ReplicaSchedulingStrategy, StrategyType
from placement_core.weights import sort_by_replicas, sum_replicas

AvailableCalculator = Callable[[list[Cluster], BindingSpec], list[TargetCluster]]
"""Produces per-cluster capacity from the candidates and the binding."""


@dataclass
class AssignState:
    """
    Working state of one scheduling decision.

    Created fresh for every decision and never shared between workloads.

    Attributes:
        candidates: Clusters that passed filtering
        strategy_type: Resolved assignment strategy
        spec: Binding being scheduled (read-only)
        strategy: Replica scheduling policy, used for static weights
        target_replicas: Replicas this division must place
        available_replicas: Sum of available_clusters capacity
        available_clusters: Per-cluster capacity (or previous placement
            when scaling down)
        scheduled_clusters: Replicas already placed, seeding the dispenser
        assigned_replicas: Sum of scheduled_clusters replicas
    """

    candidates: list[Cluster]
    strategy_type: StrategyType
    spec: BindingSpec
    strategy: ReplicaSchedulingStrategy | None = None
    target_replicas: int = 0
    available_replicas: int = 0
    available_clusters: list[TargetCluster] = field(default_factory=list)
    scheduled_clusters: list[TargetCluster] = field(default_factory=list)
    assigned_replicas: int = 0

    def build_scheduled_clusters(self) -> None:
        """Keep the previous placement on clusters that are still candidates."""
        names = {cluster.name for cluster in self.candidates}
        self.scheduled_clusters = [
            TargetCluster(name=c.name, replicas=c.replicas)
            for c in self.spec.clusters
            if c.name in names
        ]
        self.assigned_replicas = sum_replicas(self.scheduled_clusters)

    def build_available_clusters(self, calculator: AvailableCalculator) -> None:
        """Compute per-cluster capacity and its total."""
        self.available_clusters = calculator(self.candidates, self.spec)
        self.available_replicas = sum_replicas(self.available_clusters)


def aggregate_available_clusters(
    clusters: Sequence[TargetCluster], target_replicas: int
) -> list[TargetCluster]:
    """
    Narrow candidates to as few clusters as possible.

    Sorts by capacity, largest first, and keeps the shortest prefix whose
    cumulative capacity reaches target_replicas. If no prefix does, the
    whole sorted list is returned.
    """
    ordered = sort_by_replicas(clusters)
    cumulative = 0
    for i, cluster in enumerate(ordered):
        cumulative += cluster.replicas
        if cumulative >= target_replicas:
            return ordered[: i + 1]
    return ordered


def dynamic_divide_replicas(state: AssignState) -> list[TargetCluster]:
    """
    Divide target_replicas over available_clusters by capacity.

    The available capacity doubles as the weight list. The previous
    placement (scheduled_clusters) seeds the result, so the returned
    placement is the seed plus the newly divided replicas.

    Args:
        state: Prepared assignment state

    Returns:
        The merged placement.

    Raises:
        InsufficientCapacityError: available_replicas < target_replicas
        UnknownStrategyError: strategy_type is neither Aggregated nor
            DynamicWeight
    """
    if state.available_replicas < state.target_replicas:
        raise InsufficientCapacityError(state.available_replicas, state.target_replicas)

    if state.strategy_type == StrategyType.AGGREGATED:
        state.available_clusters = aggregate_available_clusters(
            state.available_clusters, state.target_replicas
        )
    elif state.strategy_type != StrategyType.DYNAMIC_WEIGHT:
        raise UnknownStrategyError(state.strategy_type)

    weights = get_static_weight_info_list_by_target_clusters(state.available_clusters)
    disp = new_dispenser(state.target_replicas, state.scheduled_clusters)
    disp = disp.take_by_weight(weights)
    return list(disp.result)


def dynamic_scale_down(state: AssignState) -> list[TargetCluster]:
    """
    Shrink a placement proportionally to how replicas were spread before.

    The previous placement becomes the weight reference and the call is
    handled as a first schedule: no seed, the full desired count as
    target.
    """
    state.target_replicas = state.spec.replicas
    state.scheduled_clusters = []
    state.assigned_replicas = 0
    state.build_available_clusters(lambda _, spec: sort_by_replicas(spec.clusters))
    return dynamic_divide_replicas(state)


def dynamic_scale_up(
    state: AssignState, estimators: Sequence[CapacityEstimatorProtocol]
) -> list[TargetCluster]:
    """
    Place only the extra replicas on top of the current placement.

    A first schedule is a scale up from an empty placement.

    Args:
        state: Assignment state with scheduled_clusters already built
        estimators: Capacity estimators giving remaining capacity

    Returns:
        Previous placement merged with the division of the delta.
    """
    state.target_replicas = state.spec.replicas - state.assigned_replicas
    state.build_available_clusters(
        lambda clusters, spec: sort_by_replicas(cal_available_replicas(clusters, spec, estimators))
    )
    return dynamic_divide_replicas(state)
