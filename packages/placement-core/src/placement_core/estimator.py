"""
Capacity estimation helpers.

Combines the answers of any number of CapacityEstimatorProtocol
implementations into one remaining-capacity figure per cluster.
"""

from collections.abc import Mapping, Sequence

from placement_protocols import (
    MAX_REPLICAS,
    UNAUTHENTIC_REPLICAS,
    CapacityEstimatorProtocol,
    Cluster,
    TargetCluster,
)

from placement_core.types import BindingSpec


class StaticCapacityEstimator:
    """
    Estimator answering from a fixed table of remaining capacities.

    Clusters missing from the table are reported as UNAUTHENTIC_REPLICAS
    so other estimators decide for them.

    Example:
        estimator = StaticCapacityEstimator({"member1": 18, "member2": 12})
        estimator.max_available_replicas(clusters, replicas=12)
    """

    def __init__(self, capacities: Mapping[str, int]) -> None:
        self._capacities = dict(capacities)

    def max_available_replicas(
        self, clusters: list[Cluster], replicas: int
    ) -> list[TargetCluster]:
        return [
            TargetCluster(
                name=cluster.name,
                replicas=self._capacities.get(cluster.name, UNAUTHENTIC_REPLICAS),
            )
            for cluster in clusters
        ]


def cal_available_replicas(
    clusters: Sequence[Cluster],
    spec: BindingSpec,
    estimators: Sequence[CapacityEstimatorProtocol],
) -> list[TargetCluster]:
    """
    Compute remaining capacity per cluster.

    Every cluster starts at MAX_REPLICAS and takes the smallest authentic
    answer of any estimator. Non-workload resources (spec.replicas == 0)
    skip estimation entirely.

    Args:
        clusters: Candidate clusters
        spec: Binding being scheduled
        estimators: Capacity estimators to consult

    Returns:
        One TargetCluster per candidate, in candidate order.
    """
    available = [TargetCluster(name=cluster.name, replicas=MAX_REPLICAS) for cluster in clusters]
    if spec.replicas == 0:
        return available

    index: dict[str, list[TargetCluster]] = {}
    for target in available:
        index.setdefault(target.name, []).append(target)
    for estimator in estimators:
        for answer in estimator.max_available_replicas(list(clusters), spec.replicas):
            if answer.replicas == UNAUTHENTIC_REPLICAS:
                continue
            for target in index.get(answer.name, []):
                if answer.replicas < target.replicas:
                    target.replicas = answer.replicas
    return available
