"""
Style Service

Binds the analysis engine to a store: analyze samples, build profiles from
them and package profiles as guidance for new writing.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, Optional
import logging

from ..config import Settings, get_settings
from ..errors import EmptyInputError, NotFoundError, PersistenceError, ValidationError
from ..models import RepresentativeSample, StyleProfile, WritingSample
from ..store import StyleStore
from ..style import StyleAnalyzer, SampleAnalysis, create_excerpt, combine_metrics, format_style_guidance
from ..style.parameters import StyleParameters, unique_in_order

logger = logging.getLogger(__name__)

REPRESENTATIVE_TITLE = "Representative Sample"


@dataclass
class Example:
    """A passage shown alongside guidance."""
    title: str
    excerpt: str

    def to_dict(self) -> dict:
        return {"title": self.title, "excerpt": self.excerpt}


@dataclass
class AnalysisResult:
    """Outcome of analyzing one text."""
    sample_id: Optional[str]
    analysis: SampleAnalysis
    summary: str

    def to_dict(self) -> dict:
        return {
            "sample_id": self.sample_id,
            "metrics": self.analysis.metrics_dict(),
            "summary": self.summary,
        }


@dataclass
class ProfileView:
    """A profile with optional guidance and example passages."""
    profile: StyleProfile
    style_guidance: Optional[str] = None
    examples: list[Example] = field(default_factory=list)

    def to_dict(self) -> dict:
        d = {
            "profile": {
                "id": self.profile.id,
                "name": self.profile.name,
                "description": self.profile.description,
                "parameters": self.profile.parameters.to_dict(),
                "genre": self.profile.genre,
                "comparable_authors": self.profile.comparable_authors,
                "user_comments": self.profile.user_comments,
            }
        }
        if self.style_guidance is not None:
            d["style_guidance"] = self.style_guidance
        if self.examples:
            d["examples"] = [e.to_dict() for e in self.examples]
        return d


@dataclass
class ProfileSummary:
    """Outcome of creating or updating a profile."""
    id: str
    name: str
    description: Optional[str]
    parameters: StyleParameters
    sample_count: int
    genre: list[str]
    comparable_authors: list[str]
    user_comments: Optional[str]
    action: str  # created, updated or replaced

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters.to_dict(),
            "sample_count": self.sample_count,
            "genre": self.genre,
            "comparable_authors": self.comparable_authors,
            "user_comments": self.user_comments,
        }


@dataclass
class WritingBrief:
    """Everything a writer needs to produce text in a profile's style."""
    profile_name: str
    style_guidance: str
    writing_prompt: str
    length_instruction: str
    examples: list[Example]
    parameters: StyleParameters

    def to_dict(self) -> dict:
        return {
            "profile_name": self.profile_name,
            "style_guidance": self.style_guidance,
            "writing_prompt": self.writing_prompt,
            "length_instruction": self.length_instruction,
            "examples": [e.to_dict() for e in self.examples],
            "parameters": self.parameters.to_dict(),
        }


@contextmanager
def _failing_to(action: str) -> Iterator[None]:
    """Add the failed operation to store errors."""
    try:
        yield
    except PersistenceError as e:
        raise PersistenceError(f"Failed to {action}: {e}") from e


def _keep_word_lists(old: StyleParameters, new: StyleParameters) -> None:
    """Carry avoid/prefer lists over to recomputed parameters."""
    if old.vocabulary is not None:
        new.vocabulary.avoid = list(old.vocabulary.avoid)
        new.vocabulary.prefer = list(old.vocabulary.prefer)
    if old.devices is not None:
        new.devices.avoid = list(old.devices.avoid)


class StyleService:
    """
    The four style operations.

    Usage:
        service = StyleService(InMemoryStyleStore())
        result = service.analyze_writing_sample(text, title="Chapter 1")
        service.create_style_profile("Noir", [result.sample_id])
    """

    def __init__(
        self,
        store: StyleStore,
        settings: Settings | None = None,
        analyzer: StyleAnalyzer | None = None,
    ):
        self.store = store
        self.settings = settings or get_settings()
        self.analyzer = analyzer or StyleAnalyzer()

    def analyze_writing_sample(
        self,
        text: str,
        save_sample: bool = True,
        title: Optional[str] = None,
        author: Optional[str] = None,
        sample_type: Optional[str] = None,
        tags: Optional[list[str]] = None,
        project_id: Optional[str] = None,
        sample_id: Optional[str] = None,
    ) -> AnalysisResult:
        """
        Analyze a text, optionally storing it as a new sample.

        When `sample_id` is given the analysis replaces that sample's previous
        one. Otherwise a new sample is created if `save_sample` is set, which
        requires a title.

        Raises:
            ValidationError: no text, or no title for a new sample
            NotFoundError: `sample_id` does not exist
            PersistenceError: the store failed
        """
        if not text:
            raise ValidationError("Text is required for analysis")
        if not sample_id and save_sample and not title:
            raise ValidationError("Title is required when saving a new sample")

        with _failing_to("analyze writing sample"):
            if sample_id:
                if self.store.get_sample(sample_id) is None:
                    raise NotFoundError(f"Writing sample with ID {sample_id} not found")
            elif save_sample:
                sample = self.store.create_sample(
                    WritingSample(
                        title=title,
                        content=text,
                        author=author,
                        sample_type=sample_type,
                        tags=tags or [],
                        project_id=project_id,
                        excerpt=create_excerpt(text),
                    )
                )
                sample_id = sample.id
                logger.info("Created new sample with ID: %s", sample_id)

            analysis = self.analyzer.analyze_text(text, sample_id=sample_id)
            if sample_id:
                self.store.save_analysis(analysis)
                logger.info("Stored style analysis for sample: %s", sample_id)

        return AnalysisResult(
            sample_id=sample_id,
            analysis=analysis,
            summary=analysis.descriptive_summary,
        )

    def get_style_profile(
        self,
        profile_id: str,
        include_examples: bool = False,
        include_style_notes: bool = True,
    ) -> ProfileView:
        """Fetch a profile with optional guidance and example passages."""
        if not profile_id:
            raise ValidationError("Profile ID is required")

        with _failing_to("retrieve style profile"):
            profile = self._require_profile(profile_id)

            examples = []
            if include_examples and profile.sample_ids:
                samples = self.store.get_samples(profile.sample_ids)
                examples = [
                    Example(title=s.title, excerpt=s.excerpt)
                    for s in samples[: self.settings.profile_example_limit]
                ]
                examples.extend(self._representative_examples(profile.representative_samples))

        return ProfileView(
            profile=profile,
            style_guidance=self._guidance(profile) if include_style_notes else None,
            examples=examples,
        )

    def create_style_profile(
        self,
        name: str,
        sample_ids: list[str],
        description: Optional[str] = None,
        project_id: Optional[str] = None,
        profile_id: Optional[str] = None,
        genre: Optional[list[str]] = None,
        comparable_authors: Optional[list[str]] = None,
        user_comments: Optional[str] = None,
        representative_samples: Optional[list[RepresentativeSample]] = None,
        add_to_existing: bool = False,
    ) -> ProfileSummary:
        """
        Create a profile from analyzed samples, or update an existing one.

        Parameters are always recomputed from every member sample. With
        `add_to_existing` the requested samples join the profile's current
        members; otherwise they replace them.

        Raises:
            ValidationError: missing name or sample ids
            NotFoundError: unknown sample or profile id
            EmptyInputError: none of the member samples has been analyzed
            PersistenceError: the store failed
        """
        if not name or not sample_ids:
            raise ValidationError("Name and at least one sample ID are required")

        requested = unique_in_order(sample_ids)

        with _failing_to("create style profile"):
            found = self.store.get_samples(requested)
            if len(found) != len(requested):
                raise NotFoundError(
                    f"Some sample IDs do not exist. Found {len(found)} of "
                    f"{len(requested)} requested samples."
                )

            existing = self._require_profile(profile_id) if profile_id else None
            adding = existing is not None and add_to_existing

            members = unique_in_order(existing.sample_ids, requested) if adding else requested
            analyses = self.store.get_analyses(members)
            if not analyses:
                raise EmptyInputError(
                    "No style analyses found for the provided samples. "
                    "Please analyze the samples first."
                )

            parameters = combine_metrics(analyses)
            if existing is not None:
                _keep_word_lists(existing.parameters, parameters)
            parameters.comparable_authors = unique_in_order(
                parameters.comparable_authors,
                existing.comparable_authors if adding else [],
                comparable_authors or [],
            )
            new_reps = list(representative_samples or [])

            if existing is not None:
                profile = existing.model_copy(
                    update={
                        "name": name,
                        "description": description if description is not None else existing.description,
                        "parameters": parameters,
                        "comparable_authors": parameters.comparable_authors,
                        "genre": genre if genre else existing.genre,
                        "user_comments": user_comments if user_comments else existing.user_comments,
                        "project_id": project_id if project_id else existing.project_id,
                        "sample_ids": members,
                        "representative_samples": existing.representative_samples + new_reps,
                        "updated_at": datetime.now(),
                    }
                )
                action = "updated" if adding else "replaced"
            else:
                profile = StyleProfile(
                    name=name,
                    description=description,
                    parameters=parameters,
                    genre=genre or [],
                    comparable_authors=parameters.comparable_authors,
                    user_comments=user_comments,
                    project_id=project_id,
                    sample_ids=members,
                    representative_samples=new_reps,
                )
                action = "created"

            self.store.save_profile(profile)

        logger.info(
            "%s profile %s from %d analyses (%d samples)",
            action.capitalize(), profile.id, len(analyses), len(members),
        )

        return ProfileSummary(
            id=profile.id,
            name=profile.name,
            description=profile.description,
            parameters=parameters,
            sample_count=len(members),
            genre=profile.genre,
            comparable_authors=profile.comparable_authors,
            user_comments=profile.user_comments,
            action=action,
        )

    def write_in_style(
        self,
        prompt: str,
        profile_id: str,
        length: Optional[int] = None,
        include_style_notes: bool = True,
    ) -> WritingBrief:
        """Package a writing prompt with a profile's guidance and examples."""
        if not prompt:
            raise ValidationError("Writing prompt is required")
        if not profile_id:
            raise ValidationError("Profile ID is required")
        if length is not None and length <= 0:
            raise ValidationError("Length must be a positive word count")

        with _failing_to("prepare writing instructions"):
            profile = self._require_profile(profile_id)

            sample_ids = profile.sample_ids[: self.settings.prompt_sample_limit]
            examples = [
                Example(title=s.title, excerpt=s.excerpt)
                for s in self.store.get_samples(sample_ids)
            ]
            examples.extend(
                self._representative_examples(
                    profile.representative_samples[: self.settings.prompt_representative_limit]
                )
            )

        return WritingBrief(
            profile_name=profile.name,
            style_guidance=self._guidance(profile) if include_style_notes else "",
            writing_prompt=prompt,
            length_instruction=f"Write approximately {length} words." if length else "",
            examples=examples,
            parameters=profile.parameters,
        )

    def _require_profile(self, profile_id: str) -> StyleProfile:
        profile = self.store.get_profile(profile_id)
        if profile is None:
            raise NotFoundError(f"Style profile with ID {profile_id} not found")
        return profile

    @staticmethod
    def _guidance(profile: StyleProfile) -> str:
        return format_style_guidance(
            profile.parameters,
            comparable_authors=profile.comparable_authors,
            user_comments=profile.user_comments,
        )

    @staticmethod
    def _representative_examples(reps: list[RepresentativeSample]) -> list[Example]:
        return [
            Example(title=r.description or REPRESENTATIVE_TITLE, excerpt=r.text_content)
            for r in reps
        ]
