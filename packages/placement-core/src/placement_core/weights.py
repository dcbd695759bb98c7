"""
Weight list and target cluster list helpers.

All orderings here are descending and stable: entries that compare equal
keep their relative input order, so remainder tie-breaks in the dispenser
stay deterministic across repeated scheduling passes.
"""

from collections.abc import Callable, Iterable, Sequence
from operator import attrgetter
from typing import Any

from placement_protocols import ClusterWeightInfo, TargetCluster


def by_descending(field_name: str) -> Callable[[Any], int]:
    """
    Build a sort key that orders items by a numeric field, largest first.

    Args:
        field_name: Attribute compared ("weight" or "replicas")

    Returns:
        Key function for sorted(); Python's sort is stable, so ties keep
        their input order.
    """
    get = attrgetter(field_name)
    return lambda item: -get(item)


def weight_sum(weights: Iterable[ClusterWeightInfo]) -> int:
    """Sum of all weights, 0 for an empty list."""
    return sum(info.weight for info in weights)


def sort_by_weight(weights: Iterable[ClusterWeightInfo]) -> list[ClusterWeightInfo]:
    """Return weights ordered by weight, heaviest first."""
    return sorted(weights, key=by_descending("weight"))


def sort_by_replicas(clusters: Iterable[TargetCluster]) -> list[TargetCluster]:
    """Return clusters ordered by replica count, largest first."""
    return sorted(clusters, key=by_descending("replicas"))


def sum_replicas(clusters: Iterable[TargetCluster]) -> int:
    """Sum of replicas across clusters."""
    return sum(cluster.replicas for cluster in clusters)


def remove_zero_replicas(clusters: Iterable[TargetCluster]) -> list[TargetCluster]:
    """Drop clusters that were assigned no replicas."""
    return [cluster for cluster in clusters if cluster.replicas > 0]


def merge_target_clusters(
    old: Sequence[TargetCluster], new: Sequence[TargetCluster]
) -> list[TargetCluster]:
    """
    Merge two placements by summing replicas per cluster.

    A cluster present on only one side is taken as is (the other side
    counts as zero). Clusters keep the order of old, followed by the
    clusters only present in new, in new's order.

    Args:
        old: Existing placement
        new: Placement to add on top

    Returns:
        A new list; neither input is modified.
    """
    merged: dict[str, int] = {}
    for cluster in old:
        merged[cluster.name] = merged.get(cluster.name, 0) + cluster.replicas
    for cluster in new:
        merged[cluster.name] = merged.get(cluster.name, 0) + cluster.replicas
    return [TargetCluster(name=name, replicas=replicas) for name, replicas in merged.items()]


def duplicate_names(names: Iterable[str]) -> list[str]:
    """Names listed more than once, each reported once in first-seen order."""
    seen: set[str] = set()
    repeated: dict[str, None] = {}
    for name in names:
        if name in seen:
            repeated[name] = None
        seen.add(name)
    return list(repeated)
