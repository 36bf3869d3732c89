"""StoryVerse - Analyze writing samples and turn them into reusable style profiles."""

__version__ = "0.1.0"
