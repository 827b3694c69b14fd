# phy/errors.py
# Error taxonomy for the throughput pipeline.
from __future__ import annotations


class PipelineError(ValueError):
    """Base class for every error raised by a pipeline stage."""


class InvalidInputError(PipelineError):
    """A scalar input is outside its physical domain (bandwidth, layers, DL:UL ratio, ...)."""


class UndefinedOperationError(PipelineError):
    """A mathematical operation is undefined for the given value (log of a non-positive number)."""
