"""
Replica assignment entry point.

assign_replicas() is what the surrounding scheduler calls once filtering
has produced the candidate clusters. It resolves the placement into a
strategy and hands the decision to the matching assign function:

- Duplicated: every candidate runs the full replica count
- StaticWeight: divide by configured weight rules
- Aggregated / DynamicWeight: divide by capacity, scaling up or down
  relative to the previous placement

Clusters that end up with zero replicas are dropped from the result.
"""

import logging
from collections.abc import Callable, Sequence

from placement_protocols import (
    CapacityEstimatorProtocol,
    Cluster,
    ClusterMatcherProtocol,
    TargetCluster,
)

from placement_core.dispenser import new_dispenser
from placement_core.division import AssignState, dynamic_scale_down, dynamic_scale_up
from placement_core.errors import (
    DuplicateClusterError,
    NoClustersError,
    UnsupportedStrategyError,
)
from placement_core.static_weight import (
    get_default_weight_preference,
    get_static_weight_info_list,
)
from placement_core.types import (
    BindingSpec,
    Placement,
    ReplicaDivisionPreference,
    ReplicaSchedulingType,
    StrategyType,
)
from placement_core.weights import duplicate_names, remove_zero_replicas

logger = logging.getLogger(__name__)


def resolve_strategy_type(placement: Placement) -> StrategyType | None:
    """
    Map a placement onto an assignment strategy.

    Returns:
        The strategy, or None when the placement combination is unknown.
    """
    if placement.replica_scheduling_type() == ReplicaSchedulingType.DUPLICATED:
        return StrategyType.DUPLICATED

    strategy = placement.replica_scheduling
    if strategy is None or strategy.replica_scheduling_type != ReplicaSchedulingType.DIVIDED:
        return None
    if strategy.replica_division_preference == ReplicaDivisionPreference.AGGREGATED:
        return StrategyType.AGGREGATED
    if strategy.replica_division_preference == ReplicaDivisionPreference.WEIGHTED:
        preference = strategy.weight_preference
        if preference is not None and preference.dynamic_weight is not None:
            return StrategyType.DYNAMIC_WEIGHT
        return StrategyType.STATIC_WEIGHT
    return None


def new_assign_state(
    candidates: Sequence[Cluster], placement: Placement, spec: BindingSpec
) -> AssignState:
    """
    Build the assignment state for one decision.

    Raises:
        UnsupportedStrategyError: The placement resolves to no strategy
    """
    strategy_type = resolve_strategy_type(placement)
    if strategy_type is None:
        strategy = placement.replica_scheduling
        preference = strategy.replica_division_preference if strategy else None
        raise UnsupportedStrategyError(
            placement.replica_scheduling_type().value,
            preference.value if preference else None,
        )
    return AssignState(
        candidates=list(candidates),
        strategy_type=strategy_type,
        spec=spec,
        strategy=placement.replica_scheduling,
    )


def assign_by_duplicated_strategy(
    state: AssignState,
    estimators: Sequence[CapacityEstimatorProtocol],
    matcher: ClusterMatcherProtocol | None,
) -> list[TargetCluster]:
    """Every candidate gets the full replica count."""
    return [
        TargetCluster(name=cluster.name, replicas=state.spec.replicas)
        for cluster in state.candidates
    ]


def assign_by_static_weight_strategy(
    state: AssignState,
    estimators: Sequence[CapacityEstimatorProtocol],
    matcher: ClusterMatcherProtocol | None,
) -> list[TargetCluster]:
    """Divide the full replica count by configured static weights."""
    preference = state.strategy.weight_preference if state.strategy else None
    if preference is None:
        preference = get_default_weight_preference(state.candidates)
    weights = get_static_weight_info_list(
        state.candidates, preference.static_weight_list, matcher
    )
    disp = new_dispenser(state.spec.replicas).take_by_weight(weights)
    return list(disp.result)


def assign_by_dynamic_strategy(
    state: AssignState,
    estimators: Sequence[CapacityEstimatorProtocol],
    matcher: ClusterMatcherProtocol | None,
) -> list[TargetCluster]:
    """
    Divide by capacity relative to the previous placement.

    More replicas already assigned than desired scales down; fewer scales
    up (a first schedule included); an equal count keeps the placement.
    """
    state.build_scheduled_clusters()
    if state.assigned_replicas > state.spec.replicas:
        logger.info(
            f"Scaling down from {state.assigned_replicas} to {state.spec.replicas} replicas"
        )
        return dynamic_scale_down(state)
    if state.assigned_replicas < state.spec.replicas:
        logger.info(
            f"Scaling up from {state.assigned_replicas} to {state.spec.replicas} replicas"
        )
        return dynamic_scale_up(state, estimators)
    logger.debug(f"Placement already holds {state.assigned_replicas} replicas, keeping it")
    return state.scheduled_clusters


AssignFunc = Callable[
    [AssignState, Sequence[CapacityEstimatorProtocol], ClusterMatcherProtocol | None],
    list[TargetCluster],
]

ASSIGN_FUNCS: dict[StrategyType, AssignFunc] = {
    StrategyType.DUPLICATED: assign_by_duplicated_strategy,
    StrategyType.AGGREGATED: assign_by_dynamic_strategy,
    StrategyType.STATIC_WEIGHT: assign_by_static_weight_strategy,
    StrategyType.DYNAMIC_WEIGHT: assign_by_dynamic_strategy,
}


def assign_replicas(
    candidates: Sequence[Cluster],
    placement: Placement,
    spec: BindingSpec,
    estimators: Sequence[CapacityEstimatorProtocol] = (),
    matcher: ClusterMatcherProtocol | None = None,
) -> list[TargetCluster]:
    """
    Decide how many replicas each candidate cluster runs.

    Args:
        candidates: Clusters that passed filtering
        placement: Placement policy of the workload
        spec: Desired replicas and previous placement
        estimators: Capacity estimators for scaling up
        matcher: Predicate for static weight rules (defaults to affinity
            matching)

    Returns:
        Placement without zero-replica clusters. For a non-workload
        resource (spec.replicas == 0) every candidate is listed with 0
        replicas.

    Raises:
        DivisionError: No candidates, repeated candidate names, unsupported
            placement or not enough capacity
    """
    if not candidates:
        raise NoClustersError()
    repeated = duplicate_names(cluster.name for cluster in candidates)
    if repeated:
        raise DuplicateClusterError(repeated)

    if spec.replicas == 0:
        return [TargetCluster(name=cluster.name) for cluster in candidates]

    state = new_assign_state(candidates, placement, spec)
    logger.debug(
        f"Assigning {spec.replicas} replicas over {len(candidates)} clusters "
        f"with strategy {state.strategy_type.value}"
    )
    assign_func = ASSIGN_FUNCS[state.strategy_type]
    result = assign_func(state, estimators, matcher)
    return remove_zero_replicas(result)
