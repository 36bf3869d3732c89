"""Qualitative scales shared by sample descriptions and style guidance."""

# Average words per sentence
SHORT_SENTENCES_BELOW = 12
MODERATE_SENTENCES_BELOW = 20

# Complexity score (0-1)
SIMPLE_BELOW = 0.4
MODERATELY_COMPLEX_BELOW = 0.7

# Lexical diversity (0-1)
LIMITED_DIVERSITY_BELOW = 0.4
VARIED_DIVERSITY_BELOW = 0.6


def sentence_length_label(avg_length: float) -> str:
    """Return "short", "moderate" or "long"."""
    if avg_length < SHORT_SENTENCES_BELOW:
        return "short"
    if avg_length < MODERATE_SENTENCES_BELOW:
        return "moderate"
    return "long"


def complexity_label(score: float) -> str:
    """Return "simple", "moderately complex" or "complex"."""
    if score < SIMPLE_BELOW:
        return "simple"
    if score < MODERATELY_COMPLEX_BELOW:
        return "moderately complex"
    return "complex"


def diversity_label(diversity: float) -> str:
    """Return "limited", "varied" or "highly diverse"."""
    if diversity < LIMITED_DIVERSITY_BELOW:
        return "limited"
    if diversity < VARIED_DIVERSITY_BELOW:
        return "varied"
    return "highly diverse"
