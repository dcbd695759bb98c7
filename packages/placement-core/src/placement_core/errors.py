"""
Exception classes for replica division failures.

This module defines the failures a division call can report:
- InsufficientCapacityError: Clusters cannot hold the requested replicas
- UnknownStrategyError: Strategy selector outside the division enum
- UnsupportedStrategyError: Placement resolves to no known strategy
- NoClustersError: No candidate cluster to schedule onto
- DuplicateClusterError: A cluster name is listed twice

A division call either returns a complete placement or raises one of
these; there is never a partial result.

Per project patterns:
- Inherit from a common base so callers can catch one type
- Store context data in attributes for error handling
- Include descriptive message with relevant details
"""


class DivisionError(Exception):
    """Base class for all replica division failures."""


class InsufficientCapacityError(DivisionError):
    """
    Raised when aggregate capacity is below the requested replica count.

    Never retried internally. Callers may re-discover capacity and retry.

    Attributes:
        available: Maximum number of replicas the clusters can hold
        target: Number of replicas requested
    """

    def __init__(self, available: int, target: int) -> None:
        self.available = available
        self.target = target
        super().__init__(
            f"clusters resources are not enough to schedule {target} replicas, "
            f"max {available} replicas are supported"
        )


class UnknownStrategyError(DivisionError):
    """
    Raised when a division is asked to run an undefined strategy.

    Unreachable with a validated placement; reported as an error so the
    caller can fail one scheduling cycle instead of the process.

    Attributes:
        strategy: The offending strategy value
    """

    def __init__(self, strategy: object) -> None:
        self.strategy = strategy
        super().__init__(f"undefined strategy type: {getattr(strategy, 'value', strategy)}")


class UnsupportedStrategyError(DivisionError):
    """
    Raised when a placement does not resolve to an assignment strategy.

    Attributes:
        scheduling_type: The placement's replica scheduling type
        division_preference: The placement's division preference, if any
    """

    def __init__(self, scheduling_type: object, division_preference: object) -> None:
        self.scheduling_type = scheduling_type
        self.division_preference = division_preference
        super().__init__(
            f"unsupported replica scheduling strategy, "
            f"replicaSchedulingType: {scheduling_type}, "
            f"replicaDivisionPreference: {division_preference}, "
            f"please try another scheduling strategy"
        )


class NoClustersError(DivisionError):
    """Raised when there is no candidate cluster to schedule onto."""

    def __init__(self) -> None:
        super().__init__("no clusters available to schedule")


class DuplicateClusterError(DivisionError):
    """
    Raised when the same cluster name appears more than once in a list
    that must name each cluster once.

    Attributes:
        names: The repeated cluster names, in first-seen order
    """

    def __init__(self, names: list[str]) -> None:
        self.names = names
        super().__init__(f"duplicate cluster names: {', '.join(names)}")
