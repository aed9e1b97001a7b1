"""
Shared compute infrastructure for pytost.

Domain-specific backends live in {domain}/backends/. This package holds
numeric plumbing shared across them.

Submodules:
    timing: Execution timing utilities
"""

from pytost.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]
