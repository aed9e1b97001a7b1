"""Computational backends for equivalence tests."""

from pytost.equivalence.backends.cpu import CPUEquivalenceBackend

__all__ = ["CPUEquivalenceBackend"]
