"""
Stylometric Metrics

Per-sample extractors for sentence structure, vocabulary, narrative
characteristics, stylistic devices and tone. Every extractor is a pure
function of the raw text and is total over all strings, including "".

Several fields are fixed values standing in for measures that are not
implemented yet. They are kept stable so aggregation and guidance stay
numerically consistent until a real analyzer replaces them.
"""

from dataclasses import dataclass, field, asdict
import re


# Sentence boundaries: one or more terminal punctuation marks
SENTENCE_SPLIT = re.compile(r"[.!?]+")

SHORT_SENTENCE_MAX = 10   # words, inclusive
MEDIUM_SENTENCE_MAX = 20  # words, inclusive
FRAGMENT_MAX = 4          # sentences under 5 words are fragments
COMPLEXITY_SCALE = 25.0   # avg words per sentence that maps to complexity 1.0

FIRST_PERSON_WORDS = ["I", "me", "my", "mine", "we", "us", "our", "ours"]
THIRD_PERSON_WORDS = [
    "he", "him", "his", "she", "her", "hers",
    "they", "them", "their", "theirs",
]
PRESENT_TENSE_WORDS = ["is", "are", "am", "being", "do", "does", "has", "have"]
PAST_TENSE_WORDS = ["was", "were", "had", "did"]

POSITIVE_WORDS = ["happy", "joy", "love", "excellent", "good", "great"]
NEGATIVE_WORDS = ["sad", "angry", "hate", "terrible", "bad", "awful"]
FORMAL_WORDS = ["therefore", "furthermore", "consequently", "nevertheless"]

FORMAL_WORD_RATIO = 0.01


def _word_pattern(words: list[str]) -> re.Pattern:
    return re.compile(r"\b(?:" + "|".join(words) + r")\b", re.IGNORECASE)


_FIRST_PERSON = _word_pattern(FIRST_PERSON_WORDS)
_THIRD_PERSON = _word_pattern(THIRD_PERSON_WORDS)
_PRESENT_TENSE = _word_pattern(PRESENT_TENSE_WORDS)
_PAST_TENSE = _word_pattern(PAST_TENSE_WORDS)


@dataclass
class LengthDistribution:
    """Share of short, medium and long sentences."""
    short: float = 0.0
    medium: float = 0.0
    long: float = 0.0


@dataclass
class SentenceMetrics:
    """Sentence-structure metrics for one sample."""
    avg_length: float = 0.0  # words per sentence
    length_distribution: LengthDistribution = field(default_factory=LengthDistribution)
    complexity_score: float = 0.0
    question_frequency: float = 0.0  # "?" count per sentence
    fragment_frequency: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "SentenceMetrics":
        dist = d.get("length_distribution") or {}
        return cls(
            avg_length=d.get("avg_length", 0.0),
            length_distribution=LengthDistribution(
                short=dist.get("short", 0.0),
                medium=dist.get("medium", 0.0),
                long=dist.get("long", 0.0),
            ),
            complexity_score=d.get("complexity_score", 0.0),
            question_frequency=d.get("question_frequency", 0.0),
            fragment_frequency=d.get("fragment_frequency", 0.0),
        )


def _default_pos_distribution() -> dict[str, float]:
    return {"nouns": 0.25, "verbs": 0.2, "adjectives": 0.15, "adverbs": 0.08}


@dataclass
class VocabularyMetrics:
    """Vocabulary metrics for one sample."""
    lexical_diversity: float = 0.0  # unique / total tokens
    # Unimplemented measures: fixed values
    formality_score: float = 0.65
    unusual_word_frequency: float = 0.05
    part_of_speech_distribution: dict[str, float] = field(default_factory=_default_pos_distribution)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "VocabularyMetrics":
        return cls(
            lexical_diversity=d.get("lexical_diversity", 0.0),
            formality_score=d.get("formality_score", 0.0),
            unusual_word_frequency=d.get("unusual_word_frequency", 0.0),
            part_of_speech_distribution=dict(d.get("part_of_speech_distribution") or {}),
        )


@dataclass
class NarrativeCharacteristics:
    """Point of view, tense and narrative balance for one sample."""
    pov: str = "unknown"    # first_person, third_person or unknown
    tense: str = "unknown"  # present, past or unknown
    # Unimplemented measures: fixed values
    description_density: float = 0.4
    action_to_reflection_ratio: float = 1.5
    show_vs_tell_balance: float = 0.65

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "NarrativeCharacteristics":
        return cls(
            pov=d.get("pov") or "unknown",
            tense=d.get("tense") or "unknown",
            description_density=d.get("description_density", 0.0),
            # A missing ratio counts as balanced
            action_to_reflection_ratio=d.get("action_to_reflection_ratio") or 1.0,
            show_vs_tell_balance=d.get("show_vs_tell_balance", 0.0),
        )


@dataclass
class StylisticDevices:
    """Figurative-language frequencies for one sample.

    Unimplemented measure: every field is a fixed value.
    """
    metaphor_frequency: float = 0.02
    simile_frequency: float = 0.015
    alliteration_frequency: float = 0.008
    repetition_patterns: float = 0.03

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "StylisticDevices":
        return cls(
            metaphor_frequency=d.get("metaphor_frequency", 0.0),
            simile_frequency=d.get("simile_frequency", 0.0),
            alliteration_frequency=d.get("alliteration_frequency", 0.0),
            repetition_patterns=d.get("repetition_patterns", 0.0),
        )


@dataclass
class ToneAttributes:
    """Emotional tone and formality for one sample."""
    emotional_tone: list[str] = field(default_factory=lambda: ["neutral"])
    formality_level: str = "casual"  # formal or casual
    # Unimplemented measures: fixed values
    humor_level: float = 0.2
    sarcasm_level: float = 0.1

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "ToneAttributes":
        return cls(
            emotional_tone=list(d.get("emotional_tone") or []),
            formality_level=d.get("formality_level") or "",
            humor_level=d.get("humor_level", 0.0),
            sarcasm_level=d.get("sarcasm_level", 0.0),
        )


def split_into_sentences(text: str) -> list[str]:
    """Split text on terminal punctuation, dropping blank fragments."""
    return [s for s in SENTENCE_SPLIT.split(text) if s.strip()]


def calculate_sentence_metrics(text: str) -> SentenceMetrics:
    """
    Calculate sentence-structure metrics for a text.

    Args:
        text: Raw text of the sample

    Returns:
        SentenceMetrics; every ratio is 0 when the text has no sentences
    """
    sentences = split_into_sentences(text)
    if not sentences:
        return SentenceMetrics()

    count = len(sentences)
    lengths = [len(s.split()) for s in sentences]
    avg_length = sum(lengths) / count

    short = sum(1 for n in lengths if n <= SHORT_SENTENCE_MAX)
    medium = sum(1 for n in lengths if SHORT_SENTENCE_MAX < n <= MEDIUM_SENTENCE_MAX)
    long = sum(1 for n in lengths if n > MEDIUM_SENTENCE_MAX)
    fragments = sum(1 for n in lengths if n <= FRAGMENT_MAX)

    return SentenceMetrics(
        avg_length=avg_length,
        length_distribution=LengthDistribution(
            short=short / count,
            medium=medium / count,
            long=long / count,
        ),
        complexity_score=min(1.0, avg_length / COMPLEXITY_SCALE),
        question_frequency=text.count("?") / count,
        fragment_frequency=fragments / count,
    )


def calculate_vocabulary_metrics(text: str) -> VocabularyMetrics:
    """
    Calculate vocabulary metrics for a text.

    Only lexical diversity is measured; the remaining fields keep their
    fixed defaults and do not vary with input.
    """
    words = text.lower().split()
    diversity = len(set(words)) / len(words) if words else 0.0
    return VocabularyMetrics(lexical_diversity=diversity)


def analyze_narrative_characteristics(text: str) -> NarrativeCharacteristics:
    """
    Estimate point of view and tense from pronoun and auxiliary counts.

    POV is first person when first-person pronouns outnumber third-person
    ones more than two to one, third person when third-person pronouns
    simply outnumber first-person ones. Tense is present when present
    indicators outnumber past ones by more than 1.5x, past when past
    indicators outnumber present ones.
    """
    first = len(_FIRST_PERSON.findall(text))
    third = len(_THIRD_PERSON.findall(text))

    pov = "unknown"
    if first > third * 2:
        pov = "first_person"
    elif third > first:
        pov = "third_person"

    present = len(_PRESENT_TENSE.findall(text))
    past = len(_PAST_TENSE.findall(text))

    tense = "unknown"
    if present > past * 1.5:
        tense = "present"
    elif past > present:
        tense = "past"

    return NarrativeCharacteristics(pov=pov, tense=tense)


def analyze_stylistic_devices(text: str) -> StylisticDevices:
    """Return stylistic device frequencies (unimplemented measure: fixed values)."""
    return StylisticDevices()


def analyze_tone(text: str) -> ToneAttributes:
    """
    Classify emotional tone and formality with small fixed lexicons.

    Tokens are whitespace-split and case-folded; punctuation attached to a
    word prevents a match.
    """
    words = text.lower().split()
    positive = sum(1 for w in words if w in POSITIVE_WORDS)
    negative = sum(1 for w in words if w in NEGATIVE_WORDS)
    formal = sum(1 for w in words if w in FORMAL_WORDS)

    if positive > negative * 2:
        emotional_tone = ["optimistic"]
    elif negative > positive * 2:
        emotional_tone = ["pessimistic"]
    else:
        emotional_tone = ["neutral"]

    formal_ratio = formal / len(words) if words else 0.0
    formality = "formal" if formal_ratio > FORMAL_WORD_RATIO else "casual"

    return ToneAttributes(emotional_tone=emotional_tone, formality_level=formality)
