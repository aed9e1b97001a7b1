"""
Generic result container for pytost computations.

Every backend returns a Result wrapping its domain-specific parameter
payload. The envelope carries what is common to all tests: metadata about
the run, the timing breakdown, which backend produced it, and the non-fatal
warnings raised along the way.

Design decisions:
    - Generic over parameter payload P
    - info dict for flexible metadata (test type, hypothesis, bound units)
    - timing is optional so tests can build results by hand
    - Immutable (frozen=True); a result is computed once and only read
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (test statistics, intervals, verdict)
        info: Structured metadata about the computation
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=TOSTParams(...),
        ...     info={'test_type': 'tost_two_sample', 'hypothesis': 'EQU'},
        ...     timing={'total_seconds': 0.0004},
        ...     backend_name='cpu_equivalence',
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
