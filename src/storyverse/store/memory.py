"""In-process and JSON-file stores."""

import json
import logging
from pathlib import Path
from typing import Optional

from storyverse.errors import PersistenceError, ValidationError
from storyverse.models import StyleProfile, WritingSample
from storyverse.store.base import StyleStore
from storyverse.style.analyzer import SampleAnalysis

logger = logging.getLogger(__name__)


class InMemoryStyleStore(StyleStore):
    """Keeps every record in dictionaries. Records are copied in and out."""

    def __init__(self) -> None:
        self._samples: dict[str, WritingSample] = {}
        self._analyses: dict[str, SampleAnalysis] = {}
        self._profiles: dict[str, StyleProfile] = {}

    def create_sample(self, sample: WritingSample) -> WritingSample:
        self._samples[sample.id] = sample.model_copy(deep=True)
        self._changed()
        return sample

    def get_sample(self, sample_id: str) -> Optional[WritingSample]:
        sample = self._samples.get(sample_id)
        return sample.model_copy(deep=True) if sample else None

    def get_samples(self, sample_ids: list[str]) -> list[WritingSample]:
        return [
            self._samples[sid].model_copy(deep=True)
            for sid in sample_ids
            if sid in self._samples
        ]

    def save_analysis(self, analysis: SampleAnalysis) -> SampleAnalysis:
        if not analysis.sample_id:
            raise ValidationError("An analysis needs a sample id to be stored")
        self._analyses[analysis.sample_id] = SampleAnalysis.from_dict(analysis.to_dict())
        self._changed()
        return analysis

    def get_analyses(self, sample_ids: list[str]) -> list[SampleAnalysis]:
        return [
            SampleAnalysis.from_dict(self._analyses[sid].to_dict())
            for sid in sample_ids
            if sid in self._analyses
        ]

    def get_profile(self, profile_id: str) -> Optional[StyleProfile]:
        profile = self._profiles.get(profile_id)
        return profile.model_copy(deep=True) if profile else None

    def save_profile(self, profile: StyleProfile) -> StyleProfile:
        self._profiles[profile.id] = profile.model_copy(deep=True)
        self._changed()
        return profile

    def _changed(self) -> None:
        """Hook called after every write."""


class JsonFileStyleStore(InMemoryStyleStore):
    """
    In-memory store mirrored to a single JSON document.

    The whole document is rewritten after every change.
    """

    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        if self.path.exists():
            self._load()

    def _load(self) -> None:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Failed to read store file {self.path}: {e}") from e

        for d in data.get("samples", []):
            sample = WritingSample.model_validate(d)
            self._samples[sample.id] = sample
        for d in data.get("analyses", []):
            analysis = SampleAnalysis.from_dict(d)
            self._analyses[analysis.sample_id] = analysis
        for d in data.get("profiles", []):
            profile = StyleProfile.model_validate(d)
            self._profiles[profile.id] = profile

        logger.debug(
            "Loaded %d samples, %d analyses, %d profiles from %s",
            len(self._samples), len(self._analyses), len(self._profiles), self.path,
        )

    def _changed(self) -> None:
        data = {
            "samples": [s.model_dump(mode="json") for s in self._samples.values()],
            "analyses": [a.to_dict() for a in self._analyses.values()],
            "profiles": [p.model_dump(mode="json") for p in self._profiles.values()],
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error("Could not write %s: %s", self.path, e)
            raise PersistenceError(f"Failed to write store file {self.path}: {e}") from e
