"""Data models for analysis parameters and results."""

from .analysis_params import AnalysisParams
from .block_shape import BlockShape
from .analysis_result import AnalysisResult
from .intermediate_data import IntermediateData
from .sweep_row import SweepRow

__all__ = ['AnalysisParams', 'BlockShape', 'AnalysisResult', 'IntermediateData', 'SweepRow']
