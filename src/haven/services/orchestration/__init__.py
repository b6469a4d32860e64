"""Orchestration package - unified safety evaluation."""

from haven.services.orchestration.safety_pipeline import SafetyPipeline, SafetyEvaluation

__all__ = ["SafetyPipeline", "SafetyEvaluation"]
