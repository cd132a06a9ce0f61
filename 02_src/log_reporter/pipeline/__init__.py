"""Drain pipeline module."""

from ..stats import PipelineStats
from .pipeline import DecodedBatch, DrainPipeline, IDrainPipeline

__all__ = ["DecodedBatch", "DrainPipeline", "IDrainPipeline", "PipelineStats"]
