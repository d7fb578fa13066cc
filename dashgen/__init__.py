"""
DashGen - Data Reasoning for Dashboard Generation

Turns an uploaded tabular dataset into a structured dashboard plan and an
instruction block for a code-generating model, biased by the outcomes of
past generations on similarly shaped data.
"""

__version__ = "1.0.0"
__author__ = "DashGen Team"

from dashgen.config import DashGenConfig
from dashgen.core.reasoning import DataReasoningEngine

__all__ = ["DashGenConfig", "DataReasoningEngine", "__version__"]
