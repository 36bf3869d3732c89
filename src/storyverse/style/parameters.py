"""
Composite Style Parameters

Aggregate the analyses of several samples into the parameter set a style
profile carries. Scalars are averaged, categorical fields take the most
common value and tag lists are unioned.
"""

from dataclasses import dataclass, field, asdict
from typing import Iterable, Optional, Sequence
from collections import Counter

from ..errors import EmptyInputError
from .analyzer import SampleAnalysis


QUESTIONS_ABOVE = 0.05       # mean "?" per sentence
DESCRIPTION_HEAVY_BELOW = 1  # mean action/reflection ratio
DEVICE_ABOVE = 0.01          # mean device frequency
FORMAL_ABOVE = 0.6           # mean formality score
NEUTRAL_ABOVE = 0.4


def dominant_value(values: Iterable[Optional[str]], default: str) -> str:
    """
    Return the most frequent value, or default when there is none.

    Empty values are ignored. Ties go to the value seen first.
    """
    counts = Counter(v for v in values if v)
    if not counts:
        return default
    # most_common keeps first-seen order among equal counts
    return counts.most_common(1)[0][0]


def unique_in_order(*groups: Iterable[str]) -> list[str]:
    """Union of several lists, de-duplicated in first-seen order."""
    seen: dict[str, None] = {}
    for group in groups:
        for item in group or ():
            if item:
                seen.setdefault(item, None)
    return list(seen)


def formality_bucket(score: float) -> str:
    """Bucket a formality score into formal, neutral or casual."""
    if score > FORMAL_ABOVE:
        return "formal"
    if score > NEUTRAL_ABOVE:
        return "neutral"
    return "casual"


@dataclass
class SentenceParameters:
    avg_length: float = 0.0
    short: float = 0.0
    medium: float = 0.0
    long: float = 0.0
    complexity: float = 0.0
    question_frequency: float = 0.0
    questions: bool = False


@dataclass
class VocabularyParameters:
    diversity: float = 0.0
    formality_score: float = 0.0
    formality: str = "casual"
    avoid: list[str] = field(default_factory=list)
    prefer: list[str] = field(default_factory=list)


@dataclass
class NarrativeParameters:
    pov: str = "unknown"
    tense: str = "unknown"
    action_ratio: float = 1.0
    description_heavy: bool = False


@dataclass
class ToneParameters:
    emotional: list[str] = field(default_factory=list)
    formality: str = "neutral"
    humor: str = "low"  # no humor measure yet


@dataclass
class DeviceParameters:
    metaphor_frequency: float = 0.0
    simile_frequency: float = 0.0
    alliteration_frequency: float = 0.0
    repetition_frequency: float = 0.0
    metaphors: bool = False
    similes: bool = False
    alliteration: bool = False
    repetition: bool = False
    avoid: list[str] = field(default_factory=list)


def _section(cls, d: Optional[dict]):
    """Build a parameter section from a stored dict, ignoring unknown keys."""
    if d is None:
        return None
    known = {k: v for k, v in d.items() if k in cls.__dataclass_fields__}
    return cls(**known)


@dataclass
class StyleParameters:
    """
    Composite style of a profile.

    Sections are optional so that partially stored parameter sets can still
    be rendered; `from_analyses` always fills every section.
    """
    sentence: Optional[SentenceParameters] = None
    vocabulary: Optional[VocabularyParameters] = None
    narrative: Optional[NarrativeParameters] = None
    tone: Optional[ToneParameters] = None
    devices: Optional[DeviceParameters] = None
    comparable_authors: list[str] = field(default_factory=list)

    @classmethod
    def from_analyses(cls, analyses: Sequence[SampleAnalysis]) -> "StyleParameters":
        """
        Combine sample analyses into one parameter set.

        Args:
            analyses: Analyses of the profile's member samples, in order

        Returns:
            StyleParameters with every section filled

        Raises:
            EmptyInputError: if no analyses are given
        """
        if not analyses:
            raise EmptyInputError("Cannot combine style metrics from zero sample analyses")

        n = len(analyses)

        def mean(values: Iterable[float]) -> float:
            return sum(values) / n

        sentences = [a.sentence_metrics for a in analyses]
        vocab = [a.vocabulary_metrics for a in analyses]
        narrative = [a.narrative_characteristics for a in analyses]
        devices = [a.stylistic_devices for a in analyses]
        tones = [a.tone_attributes for a in analyses]

        question_frequency = mean(s.question_frequency for s in sentences)
        formality_score = mean(v.formality_score for v in vocab)
        action_ratio = mean(c.action_to_reflection_ratio for c in narrative)

        metaphor = mean(d.metaphor_frequency for d in devices)
        simile = mean(d.simile_frequency for d in devices)
        alliteration = mean(d.alliteration_frequency for d in devices)
        repetition = mean(d.repetition_patterns for d in devices)

        return cls(
            sentence=SentenceParameters(
                avg_length=mean(s.avg_length for s in sentences),
                short=mean(s.length_distribution.short for s in sentences),
                medium=mean(s.length_distribution.medium for s in sentences),
                long=mean(s.length_distribution.long for s in sentences),
                complexity=mean(s.complexity_score for s in sentences),
                question_frequency=question_frequency,
                questions=question_frequency > QUESTIONS_ABOVE,
            ),
            vocabulary=VocabularyParameters(
                diversity=mean(v.lexical_diversity for v in vocab),
                formality_score=formality_score,
                formality=formality_bucket(formality_score),
            ),
            narrative=NarrativeParameters(
                pov=dominant_value((c.pov for c in narrative), "unknown"),
                tense=dominant_value((c.tense for c in narrative), "unknown"),
                action_ratio=action_ratio,
                description_heavy=action_ratio < DESCRIPTION_HEAVY_BELOW,
            ),
            tone=ToneParameters(
                emotional=unique_in_order(*(t.emotional_tone for t in tones)),
                formality=dominant_value((t.formality_level for t in tones), "neutral"),
            ),
            devices=DeviceParameters(
                metaphor_frequency=metaphor,
                simile_frequency=simile,
                alliteration_frequency=alliteration,
                repetition_frequency=repetition,
                metaphors=metaphor > DEVICE_ABOVE,
                similes=simile > DEVICE_ABOVE,
                alliteration=alliteration > DEVICE_ABOVE,
                repetition=repetition > DEVICE_ABOVE,
            ),
            comparable_authors=unique_in_order(*(a.comparable_authors for a in analyses)),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary; absent sections are omitted."""
        d = {}
        for key in ["sentence", "vocabulary", "narrative", "tone", "devices"]:
            val = getattr(self, key)
            if val is not None:
                d[key] = asdict(val)
        d["comparable_authors"] = list(self.comparable_authors)
        return d

    @classmethod
    def from_dict(cls, d: Optional[dict]) -> "StyleParameters":
        d = d or {}
        return cls(
            sentence=_section(SentenceParameters, d.get("sentence")),
            vocabulary=_section(VocabularyParameters, d.get("vocabulary")),
            narrative=_section(NarrativeParameters, d.get("narrative")),
            tone=_section(ToneParameters, d.get("tone")),
            devices=_section(DeviceParameters, d.get("devices")),
            comparable_authors=unique_in_order(d.get("comparable_authors") or []),
        )


def combine_metrics(analyses: Sequence[SampleAnalysis]) -> StyleParameters:
    """Aggregate sample analyses into composite style parameters."""
    return StyleParameters.from_analyses(analyses)
