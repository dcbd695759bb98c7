"""
Pydantic request types for placement input files.

This module provides Pydantic models for validating the JSON documents the
CLI reads:
- DivisionRequest: A prepared division (capacities, seed, target)
- AssignmentRequest: Candidates, placement policy and binding spec

These are external input types. Each converts into the internal
dataclasses (placement_protocols.types, placement_core.types) before any
division runs, so the core never sees unvalidated numbers.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from placement_protocols import Cluster, TargetCluster

from placement_core.division import AssignState
from placement_core.estimator import StaticCapacityEstimator
from placement_core.types import (
    BindingSpec,
    ClusterAffinity,
    ClusterPreferences,
    DynamicWeightFactor,
    FieldSelector,
    LabelSelector,
    LabelSelectorRequirement,
    Placement,
    ReplicaDivisionPreference,
    ReplicaSchedulingStrategy,
    ReplicaSchedulingType,
    SelectorOperator,
    StaticClusterWeight,
    StrategyType,
)
from placement_core.weights import duplicate_names, sum_replicas


def _unique_names(names: list[str]) -> None:
    repeated = duplicate_names(names)
    if repeated:
        raise ValueError(f"Duplicate cluster names: {', '.join(repeated)}")


# =============================================================================
# Cluster Types
# =============================================================================


class TargetClusterModel(BaseModel):
    """Cluster name with a replica count (placement or capacity)."""

    name: str
    replicas: int = Field(default=0, ge=0)

    def to_target_cluster(self) -> TargetCluster:
        return TargetCluster(name=self.name, replicas=self.replicas)


class ClusterModel(BaseModel):
    """
    Candidate cluster entry.

    available_replicas, when given, is the cluster's remaining capacity
    and feeds a StaticCapacityEstimator.
    """

    name: str
    labels: dict[str, str] = Field(default_factory=dict)
    provider: str = ""
    region: str = ""
    zone: str = ""
    available_replicas: int | None = Field(default=None, ge=0)

    def to_cluster(self) -> Cluster:
        return Cluster(
            name=self.name,
            labels=dict(self.labels),
            provider=self.provider,
            region=self.region,
            zone=self.zone,
        )


# =============================================================================
# Placement Policy Types
# =============================================================================


class SelectorRequirementModel(BaseModel):
    """Single selector expression."""

    key: str
    operator: SelectorOperator
    values: list[str] = Field(default_factory=list)

    def to_requirement(self) -> LabelSelectorRequirement:
        return LabelSelectorRequirement(
            key=self.key, operator=self.operator, values=list(self.values)
        )


class LabelSelectorModel(BaseModel):
    match_labels: dict[str, str] = Field(default_factory=dict)
    match_expressions: list[SelectorRequirementModel] = Field(default_factory=list)


class FieldSelectorModel(BaseModel):
    match_expressions: list[SelectorRequirementModel] = Field(default_factory=list)


class ClusterAffinityModel(BaseModel):
    """Affinity term selecting the clusters a weight rule applies to."""

    cluster_names: list[str] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=list)
    label_selector: LabelSelectorModel | None = None
    field_selector: FieldSelectorModel | None = None

    def to_affinity(self) -> ClusterAffinity:
        label_selector = None
        if self.label_selector is not None:
            label_selector = LabelSelector(
                match_labels=dict(self.label_selector.match_labels),
                match_expressions=[
                    r.to_requirement() for r in self.label_selector.match_expressions
                ],
            )
        field_selector = None
        if self.field_selector is not None:
            field_selector = FieldSelector(
                match_expressions=[
                    r.to_requirement() for r in self.field_selector.match_expressions
                ]
            )
        return ClusterAffinity(
            cluster_names=list(self.cluster_names),
            exclude=list(self.exclude),
            label_selector=label_selector,
            field_selector=field_selector,
        )


class StaticClusterWeightModel(BaseModel):
    target_cluster: ClusterAffinityModel = Field(default_factory=ClusterAffinityModel)
    weight: int = Field(ge=0)


class ClusterPreferencesModel(BaseModel):
    static_weight_list: list[StaticClusterWeightModel] = Field(default_factory=list)
    dynamic_weight: DynamicWeightFactor | None = None

    def to_preferences(self) -> ClusterPreferences:
        return ClusterPreferences(
            static_weight_list=[
                StaticClusterWeight(
                    target_cluster=rule.target_cluster.to_affinity(), weight=rule.weight
                )
                for rule in self.static_weight_list
            ],
            dynamic_weight=self.dynamic_weight,
        )


class ReplicaSchedulingModel(BaseModel):
    replica_scheduling_type: ReplicaSchedulingType = ReplicaSchedulingType.DIVIDED
    replica_division_preference: ReplicaDivisionPreference | None = None
    weight_preference: ClusterPreferencesModel | None = None


class PlacementModel(BaseModel):
    """
    Placement policy.

    Example:
    {
        "replica_scheduling": {
            "replica_scheduling_type": "Divided",
            "replica_division_preference": "Weighted",
            "weight_preference": {"dynamic_weight": "AvailableReplicas"}
        }
    }
    """

    replica_scheduling: ReplicaSchedulingModel | None = None

    def to_placement(self) -> Placement:
        scheduling = self.replica_scheduling
        if scheduling is None:
            return Placement()
        preference = None
        if scheduling.weight_preference is not None:
            preference = scheduling.weight_preference.to_preferences()
        return Placement(
            replica_scheduling=ReplicaSchedulingStrategy(
                replica_scheduling_type=scheduling.replica_scheduling_type,
                replica_division_preference=scheduling.replica_division_preference,
                weight_preference=preference,
            )
        )


class BindingSpecModel(BaseModel):
    """Desired replicas plus the previous placement."""

    replicas: int = Field(ge=0)
    clusters: list[TargetClusterModel] = Field(default_factory=list)

    @field_validator("clusters")
    @classmethod
    def validate_clusters(cls, v: list[TargetClusterModel]) -> list[TargetClusterModel]:
        _unique_names([c.name for c in v])
        return v

    def to_spec(self) -> BindingSpec:
        return BindingSpec(
            replicas=self.replicas,
            clusters=[c.to_target_cluster() for c in self.clusters],
        )


# =============================================================================
# Request Documents
# =============================================================================


class DivisionRequest(BaseModel):
    """
    A division prepared by the caller.

    Example:
    {
        "strategy": "DynamicWeight",
        "target_replicas": 12,
        "available_clusters": [
            {"name": "member1", "replicas": 18},
            {"name": "member2", "replicas": 12}
        ],
        "scheduled_clusters": []
    }
    """

    model_config = ConfigDict(extra="forbid")

    strategy: StrategyType | None = None
    target_replicas: int = Field(ge=0)
    available_clusters: list[TargetClusterModel] = Field(default_factory=list)
    scheduled_clusters: list[TargetClusterModel] = Field(default_factory=list)

    @field_validator("available_clusters", "scheduled_clusters")
    @classmethod
    def validate_clusters(cls, v: list[TargetClusterModel]) -> list[TargetClusterModel]:
        _unique_names([c.name for c in v])
        return v

    def to_state(self, default_strategy: StrategyType) -> AssignState:
        """Build the assignment state, falling back to default_strategy."""
        available = [c.to_target_cluster() for c in self.available_clusters]
        scheduled = [c.to_target_cluster() for c in self.scheduled_clusters]
        assigned = sum_replicas(scheduled)
        return AssignState(
            candidates=[Cluster(name=c.name) for c in available],
            strategy_type=self.strategy or default_strategy,
            spec=BindingSpec(replicas=assigned + self.target_replicas, clusters=scheduled),
            target_replicas=self.target_replicas,
            available_replicas=sum_replicas(available),
            available_clusters=available,
            scheduled_clusters=scheduled,
            assigned_replicas=assigned,
        )


class AssignmentRequest(BaseModel):
    """
    A full scheduling decision: candidates, placement and binding.

    Example:
    {
        "candidates": [
            {"name": "member1", "labels": {"tier": "gold"}, "available_replicas": 20}
        ],
        "placement": {"replica_scheduling": {"replica_scheduling_type": "Duplicated"}},
        "spec": {"replicas": 3, "clusters": []}
    }
    """

    model_config = ConfigDict(extra="forbid")

    candidates: list[ClusterModel]
    placement: PlacementModel = Field(default_factory=PlacementModel)
    spec: BindingSpecModel

    @field_validator("candidates")
    @classmethod
    def validate_candidates(cls, v: list[ClusterModel]) -> list[ClusterModel]:
        _unique_names([c.name for c in v])
        return v

    def to_clusters(self) -> list[Cluster]:
        return [c.to_cluster() for c in self.candidates]

    def estimator(self) -> StaticCapacityEstimator:
        """Estimator over the candidates that declare available_replicas."""
        return StaticCapacityEstimator(
            {
                c.name: c.available_replicas
                for c in self.candidates
                if c.available_replicas is not None
            }
        )
