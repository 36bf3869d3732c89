"""Persistence interface for samples, analyses and profiles."""

from abc import ABC, abstractmethod
from typing import Optional

from storyverse.models import StyleProfile, WritingSample
from storyverse.style.analyzer import SampleAnalysis


class StyleStore(ABC):
    """
    Storage collaborator for the style tools.

    Implementations raise PersistenceError for backend failures and return
    None (or omit ids) for records that do not exist.
    """

    @abstractmethod
    def create_sample(self, sample: WritingSample) -> WritingSample:
        """Store a new writing sample."""

    @abstractmethod
    def get_sample(self, sample_id: str) -> Optional[WritingSample]:
        """Fetch one sample by id."""

    @abstractmethod
    def get_samples(self, sample_ids: list[str]) -> list[WritingSample]:
        """Fetch the samples that exist, in the order requested."""

    @abstractmethod
    def save_analysis(self, analysis: SampleAnalysis) -> SampleAnalysis:
        """Store an analysis, replacing any previous analysis of the same sample."""

    @abstractmethod
    def get_analyses(self, sample_ids: list[str]) -> list[SampleAnalysis]:
        """Fetch the analyses of the given samples, in the order requested."""

    @abstractmethod
    def get_profile(self, profile_id: str) -> Optional[StyleProfile]:
        """Fetch one profile by id."""

    @abstractmethod
    def save_profile(self, profile: StyleProfile) -> StyleProfile:
        """Create or replace a profile, including membership and exemplars."""

    def close(self) -> None:
        """Release backend resources."""
