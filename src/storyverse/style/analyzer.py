"""
Style Analyzer

Main entry point for single-sample analysis. Runs every extractor over a
text and bundles the results into a SampleAnalysis.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional
import json

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
from .summary import generate_description


@dataclass
class SampleAnalysis:
    """
    Every metric facet of one analyzed sample.

    Created once per analysis and replaced wholesale when the sample is
    analyzed again.
    """
    sentence_metrics: SentenceMetrics
    vocabulary_metrics: VocabularyMetrics
    narrative_characteristics: NarrativeCharacteristics
    stylistic_devices: StylisticDevices
    tone_attributes: ToneAttributes
    descriptive_summary: str = ""

    sample_id: Optional[str] = None
    comparable_authors: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)

    def metrics_dict(self) -> dict:
        """The five metric facets keyed by name."""
        return {
            "sentence_metrics": self.sentence_metrics.to_dict(),
            "vocabulary_metrics": self.vocabulary_metrics.to_dict(),
            "narrative_characteristics": self.narrative_characteristics.to_dict(),
            "stylistic_devices": self.stylistic_devices.to_dict(),
            "tone_attributes": self.tone_attributes.to_dict(),
        }

    def to_dict(self) -> dict:
        d = {"sample_id": self.sample_id}
        d.update(self.metrics_dict())
        d["descriptive_summary"] = self.descriptive_summary
        d["comparable_authors"] = list(self.comparable_authors)
        d["created_at"] = self.created_at.isoformat()
        return d

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, d: dict) -> "SampleAnalysis":
        """Create from a stored record; missing facets fall back to empty values."""
        created_at = d.get("created_at")
        return cls(
            sentence_metrics=SentenceMetrics.from_dict(d.get("sentence_metrics") or {}),
            vocabulary_metrics=VocabularyMetrics.from_dict(d.get("vocabulary_metrics") or {}),
            narrative_characteristics=NarrativeCharacteristics.from_dict(
                d.get("narrative_characteristics") or {}
            ),
            stylistic_devices=StylisticDevices.from_dict(d.get("stylistic_devices") or {}),
            tone_attributes=ToneAttributes.from_dict(d.get("tone_attributes") or {}),
            descriptive_summary=d.get("descriptive_summary", ""),
            sample_id=d.get("sample_id"),
            comparable_authors=list(d.get("comparable_authors") or []),
            created_at=datetime.fromisoformat(created_at) if created_at else datetime.now(),
        )

    @classmethod
    def from_json(cls, json_str: str) -> "SampleAnalysis":
        return cls.from_dict(json.loads(json_str))


class StyleAnalyzer:
    """
    Analyzes text samples.

    Usage:
        analyzer = StyleAnalyzer()
        analysis = analyzer.analyze_text(text)
        print(analysis.descriptive_summary)
    """

    def analyze_text(self, text: str, sample_id: Optional[str] = None) -> SampleAnalysis:
        """
        Analyze a text and return its metric bundle.

        Args:
            text: The text to analyze (may be empty)
            sample_id: Id of the stored sample the analysis belongs to

        Returns:
            SampleAnalysis with all five facets and a descriptive summary
        """
        sentence_metrics = calculate_sentence_metrics(text)
        vocabulary_metrics = calculate_vocabulary_metrics(text)
        narrative = analyze_narrative_characteristics(text)
        devices = analyze_stylistic_devices(text)
        tone = analyze_tone(text)

        return SampleAnalysis(
            sentence_metrics=sentence_metrics,
            vocabulary_metrics=vocabulary_metrics,
            narrative_characteristics=narrative,
            stylistic_devices=devices,
            tone_attributes=tone,
            descriptive_summary=generate_description(
                sentence_metrics, vocabulary_metrics, narrative, devices, tone
            ),
            sample_id=sample_id,
        )

    def analyze_file(self, file_path: str | Path, sample_id: Optional[str] = None) -> SampleAnalysis:
        """Load a .txt, .md or .epub file and analyze its text."""
        from ..ingest.loader import load_sample

        return self.analyze_text(load_sample(Path(file_path)).text, sample_id=sample_id)
