"""Core analysis modules for DashGen."""

from dashgen.core.ingestion import FileIngestor
from dashgen.core.type_inference import TypeInferencer
from dashgen.core.domain_classifier import DomainClassifier
from dashgen.core.metric_recommender import MetricRecommender
from dashgen.core.chart_recommender import ChartRecommender
from dashgen.core.structure_planner import StructurePlanner
from dashgen.core.quality_auditor import QualityAuditor
from dashgen.core.reasoning import DataReasoningEngine

__all__ = [
    "FileIngestor",
    "TypeInferencer",
    "DomainClassifier",
    "MetricRecommender",
    "ChartRecommender",
    "StructurePlanner",
    "QualityAuditor",
    "DataReasoningEngine",
]
