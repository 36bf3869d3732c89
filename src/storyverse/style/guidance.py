"""
Style Guidance

Render composite style parameters as markdown guidance for a writer.
"""

from typing import Optional
import math

from .parameters import StyleParameters
from .scales import sentence_length_label, complexity_label, diversity_label


COMPLEXITY_GUIDANCE = {
    "simple": "simple and direct",
    "moderately complex": "moderately complex",
    "complex": "complex with multiple clauses",
}

DIVERSITY_GUIDANCE = {
    "limited": "Limited - use repetition and simple words",
    "varied": "Moderate - mix familiar words with occasional distinctive ones",
    "highly diverse": "High - use varied, precise vocabulary",
}

FORMALITY_GUIDANCE = {
    "formal": "Formal academic tone",
    "neutral": "Balanced, professional tone",
}

POV_GUIDANCE = {
    "first_person": "First person",
    "second_person": "Second person",
}

HUMOR_GUIDANCE = {
    "high": "Include humor and wit",
    "medium": "Occasional light humor",
}


def _round(value: float) -> int:
    """Round half up."""
    return int(math.floor(value + 0.5))


def _percent(fraction: float) -> int:
    return _round(fraction * 100)


def _sentence_section(params: StyleParameters) -> list[str]:
    s = params.sentence
    return [
        f"- Use predominantly {sentence_length_label(s.avg_length)} sentences "
        f"(average {_round(s.avg_length)} words per sentence)",
        f"- Sentence variety: {_percent(s.short)}% short, "
        f"{_percent(s.medium)}% medium, {_percent(s.long)}% long",
        f"- Complexity: {COMPLEXITY_GUIDANCE[complexity_label(s.complexity)]}",
        "- Question frequency: "
        + ("Include occasional questions" if s.questions else "Rarely use questions"),
    ]


def _vocabulary_section(params: StyleParameters) -> list[str]:
    v = params.vocabulary
    lines = [
        f"- Lexical diversity: {DIVERSITY_GUIDANCE[diversity_label(v.diversity)]}",
        f"- Formality: {FORMALITY_GUIDANCE.get(v.formality, 'Conversational, casual tone')}",
    ]
    if v.avoid:
        lines.append(f"- Avoid these terms: {', '.join(v.avoid)}")
    if v.prefer:
        lines.append(f"- Preferred terms: {', '.join(v.prefer)}")
    return lines


def _narrative_section(params: StyleParameters) -> list[str]:
    n = params.narrative
    return [
        f"- Point of view: {POV_GUIDANCE.get(n.pov, 'Third person')}",
        f"- Tense: {'Present tense' if n.tense == 'present' else 'Past tense'}",
        "- Description vs. action balance: "
        + ("Favor rich description" if n.description_heavy else "Favor action and plot movement"),
    ]


def _tone_section(params: StyleParameters) -> list[str]:
    t = params.tone
    lines = []
    if t.emotional:
        lines.append(f"- Emotional tone: {', '.join(t.emotional)}")
    if t.formality:
        lines.append(f"- Formality: {t.formality}")
    if t.humor:
        lines.append(f"- Humor level: {HUMOR_GUIDANCE.get(t.humor, 'Serious, minimal humor')}")
    return lines


def _devices_section(params: StyleParameters) -> list[str]:
    d = params.devices
    used = [
        name
        for name, enabled in [
            ("metaphors", d.metaphors),
            ("similes", d.similes),
            ("alliteration", d.alliteration),
            ("repetition", d.repetition),
        ]
        if enabled
    ]
    lines = []
    if used:
        lines.append(f"- Use these devices: {', '.join(used)}")
    if d.avoid:
        lines.append(f"- Avoid these devices: {', '.join(d.avoid)}")
    return lines


def format_style_guidance(
    parameters: Optional[StyleParameters],
    comparable_authors: Optional[list[str]] = None,
    user_comments: Optional[str] = None,
) -> str:
    """
    Render style parameters as markdown guidance.

    Sections appear in a fixed order and only when they have content.

    Args:
        parameters: Composite parameters (any section may be missing)
        comparable_authors: Overrides the authors stored in the parameters
        user_comments: Free-text notes appended as a final section

    Returns:
        Markdown text, or "" when there is nothing to render
    """
    params = parameters or StyleParameters()
    authors = comparable_authors if comparable_authors is not None else params.comparable_authors

    sections: list[tuple[str, list[str]]] = []
    if params.sentence is not None:
        sections.append(("Sentence Structure", _sentence_section(params)))
    if params.vocabulary is not None:
        sections.append(("Vocabulary", _vocabulary_section(params)))
    if params.narrative is not None:
        sections.append(("Narrative Approach", _narrative_section(params)))
    if params.tone is not None:
        sections.append(("Tone", _tone_section(params)))
    if params.devices is not None:
        sections.append(("Stylistic Devices", _devices_section(params)))
    if authors:
        sections.append(("Similar Authors", [f"- Emulate the style of: {', '.join(authors)}"]))
    if user_comments:
        sections.append(("Additional Notes", [user_comments]))

    parts = [
        f"## {title}\n" + "\n".join(lines) + "\n\n"
        for title, lines in sections
        if lines
    ]
    if not parts:
        return ""
    return "# Style Guidance\n\n" + "".join(parts)
