"""
Proportional replica dispenser.

A Dispenser is the fold state of one division call: the replicas still to
place and the placement accumulated so far. take_by_weight() never mutates
the receiver; it returns the next state, so a division reads as

    disp = new_dispenser(target, seed)
    disp = disp.take_by_weight(weights)
    return disp.result

Example:
    Weights A=1, B=2, C=3 and a budget of 3 give floor shares A=0, B=1,
    C=1 (sum 2). The one replica left goes to the heaviest cluster, C,
    so the delta is A=0, B=1, C=2.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from placement_protocols import ClusterWeightInfo, TargetCluster

from placement_core.weights import merge_target_clusters, sort_by_weight, weight_sum


@dataclass(frozen=True)
class Dispenser:
    """
    Remaining replica budget plus the placement accumulated so far.

    Owned by a single division call and never shared.

    Attributes:
        num_replicas: Replicas still to place
        result: Accumulated placement
    """

    num_replicas: int
    result: tuple[TargetCluster, ...] = field(default_factory=tuple)

    @property
    def done(self) -> bool:
        """
        True once the budget is exhausted and something was placed.

        A zero budget with an empty result means there was nothing to do,
        which is not the same as having finished.
        """
        return self.num_replicas == 0 and len(self.result) != 0

    def take_by_weight(self, weights: Sequence[ClusterWeightInfo]) -> "Dispenser":
        """
        Distribute the remaining budget proportionally to weights.

        Each cluster gets floor(weight * budget / sum) replicas, then the
        leftover is handed out one replica per cluster in descending weight
        order. The distribution is merged into the accumulated result.

        Args:
            weights: Cluster weights. Not modified.

        Returns:
            The next dispenser state. Equal to self when already done or
            when weights is empty or sums to zero.
        """
        if self.done:
            return self
        total = weight_sum(weights)
        if total == 0:
            return self

        ordered = sort_by_weight(weights)
        shares: list[TargetCluster] = []
        remain = self.num_replicas
        for info in ordered:
            replicas = info.weight * self.num_replicas // total
            shares.append(TargetCluster(name=info.cluster_name, replicas=replicas))
            remain -= replicas

        for share in shares:
            if remain == 0:
                break
            share.replicas += 1
            remain -= 1

        return Dispenser(
            num_replicas=remain,
            result=tuple(merge_target_clusters(self.result, shares)),
        )


def new_dispenser(num_replicas: int, init: Sequence[TargetCluster] | None = None) -> Dispenser:
    """Create a dispenser seeded with a copy of an existing placement."""
    seed = tuple(TargetCluster(name=c.name, replicas=c.replicas) for c in init or ())
    return Dispenser(num_replicas=num_replicas, result=seed)


def divide_by_weight(
    num_replicas: int,
    seed: Sequence[TargetCluster],
    weights: Sequence[ClusterWeightInfo],
) -> tuple[int, list[TargetCluster]]:
    """
    Run one weighted take as a pure function.

    Args:
        num_replicas: Budget to distribute
        seed: Placement to merge the distribution into
        weights: Cluster weights

    Returns:
        Tuple of (remaining budget, merged placement).
    """
    disp = new_dispenser(num_replicas, seed).take_by_weight(weights)
    return disp.num_replicas, list(disp.result)
