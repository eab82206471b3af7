"""
Procurement Intelligence - Pipeline Package

Entry points for the AI-assisted extraction, scoring, ranking and
summarization pipeline.
"""

from pipeline.procurement_pipeline import ProcurementPipeline

__all__ = ["ProcurementPipeline"]
