"""
Placement Core Library

Replica division for a multi-cluster scheduler. Given a desired replica
count and the candidate clusters' capacity (or a previous placement), it
decides how many replicas each cluster runs. This package provides:

- Dispenser: Proportional take-by-weight with heaviest-first remainder
- Static weights: Weight rules and previous placements as weight lists
- Division: Aggregated / dynamic-weight division, scale up and scale down
- Assignment: Strategy resolution and the assign_replicas entry point
- CLI infrastructure: Typer-based command structure
"""

__version__ = "0.1.0"

# Re-export public API for convenient imports
from placement_core.assignment import assign_replicas, new_assign_state
from placement_core.dispenser import Dispenser, divide_by_weight, new_dispenser
from placement_core.division import (
    AssignState,
    aggregate_available_clusters,
    dynamic_divide_replicas,
    dynamic_scale_down,
    dynamic_scale_up,
)
from placement_core.errors import (
    DivisionError,
    DuplicateClusterError,
    InsufficientCapacityError,
    NoClustersError,
    UnknownStrategyError,
    UnsupportedStrategyError,
)
from placement_core.types import BindingSpec, Placement, StrategyType

# Re-export data types from placement_protocols for convenience
from placement_protocols import Cluster, ClusterWeightInfo, TargetCluster

__all__ = [
    "__version__",
    # Entry points
    "assign_replicas",
    "new_assign_state",
    "dynamic_divide_replicas",
    "dynamic_scale_down",
    "dynamic_scale_up",
    "aggregate_available_clusters",
    # Dispenser
    "Dispenser",
    "new_dispenser",
    "divide_by_weight",
    # State and policy types
    "AssignState",
    "BindingSpec",
    "Placement",
    "StrategyType",
    # Errors
    "DivisionError",
    "DuplicateClusterError",
    "InsufficientCapacityError",
    "NoClustersError",
    "UnknownStrategyError",
    "UnsupportedStrategyError",
    # Data types
    "Cluster",
    "ClusterWeightInfo",
    "TargetCluster",
]
