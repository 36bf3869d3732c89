"""Excerpts and one-paragraph style descriptions for single samples."""

from .metrics import (
    SentenceMetrics,
    VocabularyMetrics,
    NarrativeCharacteristics,
    StylisticDevices,
    ToneAttributes,
)
from .scales import sentence_length_label, complexity_label, diversity_label


EXCERPT_LENGTH = 200
EXCERPT_MIN_CUT = 100  # a period must sit past this index to end the excerpt
ELLIPSIS = "..."

POV_PHRASES = {
    "first_person": "first-person",
    "third_person": "third-person",
}
TENSE_PHRASES = {
    "present": "present tense",
    "past": "past tense",
}


def create_excerpt(text: str) -> str:
    """
    Build a short preview of a text.

    Takes the first 200 characters and cuts after the last period when it
    falls past index 100. Otherwise the slice gets an ellipsis appended,
    even when the slice is the whole (short) text.
    """
    excerpt = text[:EXCERPT_LENGTH]
    last_period = excerpt.rfind(".")
    if last_period > EXCERPT_MIN_CUT:
        return excerpt[: last_period + 1]
    return excerpt + ELLIPSIS


def generate_description(
    sentence_metrics: SentenceMetrics,
    vocabulary_metrics: VocabularyMetrics,
    narrative: NarrativeCharacteristics,
    devices: StylisticDevices,
    tone: ToneAttributes,
) -> str:
    """
    Describe a sample's style in a short paragraph.

    Args:
        sentence_metrics: Sentence-structure metrics
        vocabulary_metrics: Vocabulary metrics
        narrative: Narrative characteristics
        devices: Stylistic devices (not yet reflected in the text)
        tone: Tone attributes

    Returns:
        Deterministic prose summary
    """
    length = sentence_length_label(sentence_metrics.avg_length)
    complexity = complexity_label(sentence_metrics.complexity_score)
    diversity = diversity_label(vocabulary_metrics.lexical_diversity)
    formality = "formal" if tone.formality_level == "formal" else "conversational"
    pov = POV_PHRASES.get(narrative.pov, "mixed perspective")
    tense = TENSE_PHRASES.get(narrative.tense, "mixed tense")

    tones = " and ".join(tone.emotional_tone)
    focus = (
        "focus on action over reflection"
        if narrative.action_to_reflection_ratio > 1
        else "balance of action and reflection"
    )

    return (
        f"This writing features {length}, {complexity} sentences with {diversity} vocabulary. "
        f"The style is {formality}, written in {pov} {tense}. "
        f"{tones} in tone, with a {focus}."
    )
