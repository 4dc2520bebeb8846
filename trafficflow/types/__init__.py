"""Shared enums and result containers."""

from trafficflow.types.base import MaxFlowAlgorithm
from trafficflow.types.dto import AlgorithmTiming, FlowSummary, MaxFlowComparison

__all__ = ["MaxFlowAlgorithm", "AlgorithmTiming", "FlowSummary", "MaxFlowComparison"]
