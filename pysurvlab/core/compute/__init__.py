"""Compute utilities shared across subpackages."""

from pysurvlab.core.compute.timing import Timer

__all__ = ["Timer"]
