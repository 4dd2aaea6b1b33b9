"""
Generic result container for habitstats computations.

Every backend returns a Result envelope around its domain-specific
parameter payload, so timing, warnings and method metadata travel the
same way regardless of which solver produced the numbers.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, rank, pivot tolerance)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for statistical computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific parameters (coefficients, diagnostics)
        info: Structured metadata (method, rank, tolerance)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=LinearParams(...),
        ...     info={'method': 'normal_equations', 'rank': 3},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_normal_equations'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
