"""Data models for stored samples and style profiles."""

from storyverse.models.sample import WritingSample, new_id
from storyverse.models.profile import RepresentativeSample, StyleProfile

__all__ = ["WritingSample", "RepresentativeSample", "StyleProfile", "new_id"]
