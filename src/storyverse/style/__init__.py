"""
Style Analysis Module

Turn writing samples into quantitative style metrics, merge several
samples into a composite style and render guidance for writing in it.
"""

from .metrics import (
    SentenceMetrics,
    VocabularyMetrics,
    NarrativeCharacteristics,
    StylisticDevices,
    ToneAttributes,
    calculate_sentence_metrics,
    calculate_vocabulary_metrics,
    analyze_narrative_characteristics,
    analyze_stylistic_devices,
    analyze_tone,
)
from .summary import create_excerpt, generate_description
from .analyzer import SampleAnalysis, StyleAnalyzer
from .parameters import StyleParameters, combine_metrics, dominant_value
from .guidance import format_style_guidance

__all__ = [
    # Metrics
    "SentenceMetrics",
    "VocabularyMetrics",
    "NarrativeCharacteristics",
    "StylisticDevices",
    "ToneAttributes",
    "calculate_sentence_metrics",
    "calculate_vocabulary_metrics",
    "analyze_narrative_characteristics",
    "analyze_stylistic_devices",
    "analyze_tone",
    # Summaries
    "create_excerpt",
    "generate_description",
    # Analyzer
    "SampleAnalysis",
    "StyleAnalyzer",
    # Aggregation
    "StyleParameters",
    "combine_metrics",
    "dominant_value",
    # Guidance
    "format_style_guidance",
]
