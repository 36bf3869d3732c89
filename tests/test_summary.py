"""Tests for excerpts and sample descriptions."""

import pytest

from storyverse.style.metrics import (
    NarrativeCharacteristics,
    SentenceMetrics,
    StylisticDevices,
    ToneAttributes,
    VocabularyMetrics,
)
from storyverse.style.scales import complexity_label, diversity_label, sentence_length_label
from storyverse.style.summary import create_excerpt, generate_description


class TestCreateExcerpt:
    """Test excerpt truncation rules."""

    def test_long_text_without_period(self):
        """Long text without a period is cut at 200 characters."""
        excerpt = create_excerpt("A" * 300)
        assert excerpt == "A" * 200 + "..."
        assert len(excerpt) == 203

    def test_short_text_gets_ellipsis(self):
        """Short text still gets an ellipsis."""
        assert create_excerpt("Short sentence.") == "Short sentence...."

    def test_cuts_at_late_period(self):
        """A period past index 100 ends the excerpt."""
        text = "a" * 120 + "." + "b" * 200
        assert create_excerpt(text) == "a" * 120 + "."

    def test_period_at_index_100_does_not_cut(self):
        """A period at index 100 is too early."""
        text = "a" * 100 + "." + "b" * 200
        assert create_excerpt(text) == text[:200] + "..."

    def test_only_first_200_characters_are_searched(self):
        """Periods past 200 characters are ignored."""
        text = "a" * 250 + ". tail"
        assert create_excerpt(text) == "a" * 200 + "..."

    def test_empty(self):
        """Empty text gives just the ellipsis."""
        assert create_excerpt("") == "..."


def describe(
    avg_length=8.0,
    complexity=0.32,
    diversity=0.7,
    pov="first_person",
    tense="past",
    action=1.5,
    tones=("optimistic",),
    formality="casual",
):
    return generate_description(
        SentenceMetrics(avg_length=avg_length, complexity_score=complexity),
        VocabularyMetrics(lexical_diversity=diversity),
        NarrativeCharacteristics(pov=pov, tense=tense, action_to_reflection_ratio=action),
        StylisticDevices(),
        ToneAttributes(emotional_tone=list(tones), formality_level=formality),
    )


class TestGenerateDescription:
    """Test the one-paragraph description template."""

    def test_full_description(self):
        """The whole template renders."""
        assert describe() == (
            "This writing features short, simple sentences with highly diverse vocabulary. "
            "The style is conversational, written in first-person past tense. "
            "optimistic in tone, with a focus on action over reflection."
        )

    def test_formal_third_person_present(self):
        """Formal third-person present phrasing."""
        text = describe(pov="third_person", tense="present", formality="formal")
        assert "The style is formal, written in third-person present tense." in text

    def test_unknown_pov_and_tense(self):
        """Unknown POV and tense read as mixed."""
        text = describe(pov="unknown", tense="unknown")
        assert "written in mixed perspective mixed tense." in text

    def test_balanced_ratio(self):
        """A ratio of 1 is balanced."""
        assert describe(action=1.0).endswith("with a balance of action and reflection.")

    def test_multiple_tones(self):
        """Tones are joined with "and"."""
        text = describe(tones=("optimistic", "neutral"))
        assert "optimistic and neutral in tone" in text

    def test_deterministic(self):
        """Same metrics, same description."""
        assert describe() == describe()

    @pytest.mark.parametrize(
        "avg_length,label",
        [(11.9, "short"), (12, "moderate"), (19.9, "moderate"), (20, "long")],
    )
    def test_length_thresholds(self, avg_length, label):
        """Average length labels."""
        assert sentence_length_label(avg_length) == label
        assert describe(avg_length=avg_length).startswith(f"This writing features {label}, ")

    @pytest.mark.parametrize(
        "score,label",
        [(0.39, "simple"), (0.4, "moderately complex"), (0.69, "moderately complex"), (0.7, "complex")],
    )
    def test_complexity_thresholds(self, score, label):
        """Complexity labels."""
        assert complexity_label(score) == label
        assert f", {label} sentences" in describe(complexity=score)

    @pytest.mark.parametrize(
        "diversity,label",
        [(0.39, "limited"), (0.4, "varied"), (0.59, "varied"), (0.6, "highly diverse")],
    )
    def test_diversity_thresholds(self, diversity, label):
        """Diversity labels."""
        assert diversity_label(diversity) == label
        assert f"with {label} vocabulary." in describe(diversity=diversity)
