"""
Static weight resolution.

Turns either explicit weight rules or a previous placement into a list of
cluster weights for the dispenser.
"""

from collections.abc import Sequence

from placement_protocols import Cluster, ClusterMatcherProtocol, ClusterWeightInfo, TargetCluster

from placement_core.affinity import AffinityMatcher
from placement_core.types import ClusterAffinity, ClusterPreferences, StaticClusterWeight
from placement_core.weights import weight_sum


def get_static_weight_info_list(
    clusters: Sequence[Cluster],
    weight_list: Sequence[StaticClusterWeight],
    matcher: ClusterMatcherProtocol | None = None,
) -> list[ClusterWeightInfo]:
    """
    Resolve weight rules into per-cluster weights.

    Each cluster takes the largest weight among the rules that match it.
    Clusters left at weight 0 are dropped. If nothing ends up weighted,
    every cluster gets weight 1 instead.

    Args:
        clusters: Candidate clusters
        weight_list: Static weight rules
        matcher: Rule predicate (defaults to AffinityMatcher)

    Returns:
        Weight list in candidate order.
    """
    matcher = matcher or AffinityMatcher()
    weights: list[ClusterWeightInfo] = []
    for cluster in clusters:
        weight = 0
        for rule in weight_list:
            if matcher.matches(cluster, rule.target_cluster):
                weight = max(weight, rule.weight)
        if weight > 0:
            weights.append(ClusterWeightInfo(cluster_name=cluster.name, weight=weight))

    if weight_sum(weights) == 0:
        weights = [ClusterWeightInfo(cluster_name=cluster.name, weight=1) for cluster in clusters]
    return weights


def get_static_weight_info_list_by_target_clusters(
    clusters: Sequence[TargetCluster],
) -> list[ClusterWeightInfo]:
    """Use each cluster's replica count as its weight."""
    return [
        ClusterWeightInfo(cluster_name=cluster.name, weight=cluster.replicas)
        for cluster in clusters
    ]


def get_default_weight_preference(clusters: Sequence[Cluster]) -> ClusterPreferences:
    """Weight preference giving every candidate the same weight of 1."""
    return ClusterPreferences(
        static_weight_list=[
            StaticClusterWeight(
                target_cluster=ClusterAffinity(cluster_names=[cluster.name]),
                weight=1,
            )
            for cluster in clusters
        ]
    )
