"""
Placement policy types for the replica division core.

This module defines the structures that describe how a workload wants its
replicas spread across member clusters:
- StrategyType: Enum of the assignment strategies the core understands
- ClusterAffinity and selectors: Which clusters a weight rule applies to
- Placement / ReplicaSchedulingStrategy: The policy attached to a workload
- BindingSpec: Desired replica count plus the previous placement

These are internal types built from validated input (see schemas.py).
Use str enums so values serialize to JSON unchanged.
"""

from dataclasses import dataclass, field
from enum import Enum

from placement_protocols import TargetCluster


class StrategyType(str, Enum):
    """Assignment strategies resolved from a placement."""

    DUPLICATED = "Duplicated"
    AGGREGATED = "Aggregated"
    STATIC_WEIGHT = "StaticWeight"
    DYNAMIC_WEIGHT = "DynamicWeight"


class ReplicaSchedulingType(str, Enum):
    """Whether replicas are copied to every cluster or divided among them."""

    DUPLICATED = "Duplicated"
    DIVIDED = "Divided"


class ReplicaDivisionPreference(str, Enum):
    """How divided replicas are spread."""

    AGGREGATED = "Aggregated"
    WEIGHTED = "Weighted"


class DynamicWeightFactor(str, Enum):
    """Source of dynamically computed weights."""

    AVAILABLE_REPLICAS = "AvailableReplicas"


class SelectorOperator(str, Enum):
    """Operators for label and field selector requirements."""

    IN = "In"
    NOT_IN = "NotIn"
    EXISTS = "Exists"
    DOES_NOT_EXIST = "DoesNotExist"


@dataclass
class LabelSelectorRequirement:
    """
    A single selector expression.

    Attributes:
        key: Label key (or field name for field selectors).
        operator: How the key's value is compared against values.
        values: Candidate values. Must be empty for Exists/DoesNotExist.
    """

    key: str
    operator: SelectorOperator
    values: list[str] = field(default_factory=list)


@dataclass
class LabelSelector:
    """Label selector; all match_labels and match_expressions must hold."""

    match_labels: dict[str, str] = field(default_factory=dict)
    match_expressions: list[LabelSelectorRequirement] = field(default_factory=list)


@dataclass
class FieldSelector:
    """Selector over cluster fields (provider, region, zone)."""

    match_expressions: list[LabelSelectorRequirement] = field(default_factory=list)


@dataclass
class ClusterAffinity:
    """
    Describes the set of clusters a rule applies to.

    An empty affinity matches every cluster.

    Attributes:
        cluster_names: If non-empty, only these clusters match.
        exclude: Clusters that never match.
        label_selector: Optional label selector.
        field_selector: Optional field selector.
    """

    cluster_names: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    label_selector: LabelSelector | None = None
    field_selector: FieldSelector | None = None


@dataclass
class StaticClusterWeight:
    """A static weight applied to every cluster matching target_cluster."""

    target_cluster: ClusterAffinity
    weight: int


@dataclass
class ClusterPreferences:
    """
    Weight preference of a weighted division.

    Attributes:
        static_weight_list: Static weight rules.
        dynamic_weight: When set, weights are computed from cluster
            capacity and static_weight_list is ignored.
    """

    static_weight_list: list[StaticClusterWeight] = field(default_factory=list)
    dynamic_weight: DynamicWeightFactor | None = None


@dataclass
class ReplicaSchedulingStrategy:
    """Replica scheduling part of a placement."""

    replica_scheduling_type: ReplicaSchedulingType = ReplicaSchedulingType.DIVIDED
    replica_division_preference: ReplicaDivisionPreference | None = None
    weight_preference: ClusterPreferences | None = None


@dataclass
class Placement:
    """Placement policy of a workload. No replica_scheduling means Duplicated."""

    replica_scheduling: ReplicaSchedulingStrategy | None = None

    def replica_scheduling_type(self) -> ReplicaSchedulingType:
        """Return the effective scheduling type."""
        if self.replica_scheduling is None:
            return ReplicaSchedulingType.DUPLICATED
        return self.replica_scheduling.replica_scheduling_type


@dataclass
class BindingSpec:
    """
    Workload binding as seen by the scheduler.

    Attributes:
        replicas: Desired total replica count. Zero means the resource is
            not a workload and is propagated without division.
        clusters: Previous placement, empty for a first schedule.
    """

    replicas: int
    clusters: list[TargetCluster] = field(default_factory=list)
