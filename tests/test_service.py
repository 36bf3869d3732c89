"""Tests for the style service operations."""

import pytest

from storyverse.config import Settings
from storyverse.errors import EmptyInputError, NotFoundError, PersistenceError, ValidationError
from storyverse.models import RepresentativeSample, WritingSample
from storyverse.store import InMemoryStyleStore
from storyverse.tools import StyleService


FIRST_PERSON = "I walk to the shore. My feet are cold and I am happy. We are good friends?"
THIRD_PERSON = "He walked to the shore. His feet were cold. She was waiting for him there."


@pytest.fixture
def store():
    return InMemoryStyleStore()


@pytest.fixture
def service(store):
    return StyleService(store, settings=Settings(store_backend="memory"))


def add_sample(service, text=FIRST_PERSON, title="Sample"):
    return service.analyze_writing_sample(text, title=title).sample_id


class TestAnalyzeWritingSample:
    """Test analyzing and storing samples."""

    def test_analyze_without_saving(self, service, store):
        """Nothing is stored when saving is off."""
        result = service.analyze_writing_sample(FIRST_PERSON, save_sample=False)

        assert result.sample_id is None
        assert result.summary == result.analysis.descriptive_summary
        assert store._samples == {}
        assert store._analyses == {}

    def test_saves_sample_and_analysis(self, service, store):
        """Saving stores the sample, its excerpt and its analysis."""
        result = service.analyze_writing_sample(
            FIRST_PERSON, title="Shore", author="Jane Doe", tags=["beach"], project_id="proj"
        )

        sample = store.get_sample(result.sample_id)
        assert sample.title == "Shore"
        assert sample.author == "Jane Doe"
        assert sample.tags == ["beach"]
        assert sample.excerpt == FIRST_PERSON + "..."

        analyses = store.get_analyses([result.sample_id])
        assert analyses[0].sample_id == result.sample_id
        assert analyses[0].narrative_characteristics.pov == "first_person"

    def test_result_dict(self, service):
        """The result dict carries id, metrics and summary."""
        result = service.analyze_writing_sample(FIRST_PERSON, title="Shore").to_dict()
        assert set(result) == {"sample_id", "metrics", "summary"}
        assert result["metrics"]["narrative_characteristics"]["pov"] == "first_person"

    def test_empty_text(self, service):
        """Empty text is rejected."""
        with pytest.raises(ValidationError, match="Text is required"):
            service.analyze_writing_sample("", save_sample=False)

    def test_title_required_for_new_sample(self, service):
        """A new sample needs a title."""
        with pytest.raises(ValidationError, match="Title is required"):
            service.analyze_writing_sample(FIRST_PERSON)

    def test_reanalysis_replaces_analysis(self, service, store):
        """Re-analyzing a sample replaces its analysis."""
        sample_id = add_sample(service)

        result = service.analyze_writing_sample(THIRD_PERSON, sample_id=sample_id)

        assert result.sample_id == sample_id
        analyses = store.get_analyses([sample_id])
        assert len(analyses) == 1
        assert analyses[0].narrative_characteristics.pov == "third_person"
        assert len(store._samples) == 1

    def test_unknown_sample_id(self, service):
        """Re-analyzing an unknown sample fails."""
        with pytest.raises(NotFoundError):
            service.analyze_writing_sample(FIRST_PERSON, sample_id="missing")


class TestCreateStyleProfile:
    """Test building and updating profiles."""

    def test_create(self, service, store):
        """A profile aggregates its member samples."""
        ids = [add_sample(service), add_sample(service), add_sample(service, THIRD_PERSON)]

        summary = service.create_style_profile(
            "Shore", ids, description="Seaside", comparable_authors=["Mary Oliver"], genre=["literary"]
        )

        assert summary.action == "created"
        assert summary.sample_count == 3
        assert summary.parameters.narrative.pov == "first_person"
        assert summary.comparable_authors == ["Mary Oliver"]

        profile = store.get_profile(summary.id)
        assert profile.sample_ids == ids
        assert profile.description == "Seaside"
        assert profile.genre == ["literary"]
        assert profile.parameters == summary.parameters

    def test_duplicate_ids_count_once(self, service):
        """Repeated sample ids count once."""
        sample_id = add_sample(service)
        summary = service.create_style_profile("Shore", [sample_id, sample_id])
        assert summary.sample_count == 1

    def test_requires_name_and_samples(self, service):
        """Name and sample ids are required."""
        with pytest.raises(ValidationError):
            service.create_style_profile("", ["a"])
        with pytest.raises(ValidationError):
            service.create_style_profile("Shore", [])

    def test_unknown_sample(self, service):
        """Missing samples are reported with counts."""
        sample_id = add_sample(service)
        with pytest.raises(NotFoundError, match="Found 1 of 2 requested samples"):
            service.create_style_profile("Shore", [sample_id, "missing"])

    def test_unanalyzed_samples(self, service, store):
        """Samples without analyses cannot form a profile."""
        sample = store.create_sample(WritingSample(title="Raw", content="Never analyzed."))
        with pytest.raises(EmptyInputError):
            service.create_style_profile("Shore", [sample.id])

    def test_unknown_profile(self, service):
        """Updating an unknown profile fails."""
        sample_id = add_sample(service)
        with pytest.raises(NotFoundError, match="Style profile with ID missing not found"):
            service.create_style_profile("Shore", [sample_id], profile_id="missing")

    def test_add_to_existing(self, service, store):
        """Adding samples recomputes over old and new members."""
        first = add_sample(service)
        created = service.create_style_profile(
            "Shore",
            [first],
            comparable_authors=["Mary Oliver"],
            user_comments="Keep it calm.",
            representative_samples=[RepresentativeSample(text_content="Waves.")],
        )

        second = add_sample(service, THIRD_PERSON)
        third = add_sample(service, THIRD_PERSON)
        updated = service.create_style_profile(
            "Shore",
            [second, third],
            profile_id=created.id,
            comparable_authors=["Annie Dillard"],
            representative_samples=[RepresentativeSample(text_content="Gulls.")],
            add_to_existing=True,
        )

        assert updated.action == "updated"
        assert updated.id == created.id
        assert updated.sample_count == 3
        # recomputed over all three members
        assert updated.parameters.narrative.pov == "third_person"
        assert updated.comparable_authors == ["Mary Oliver", "Annie Dillard"]
        assert updated.user_comments == "Keep it calm."

        profile = store.get_profile(created.id)
        assert profile.sample_ids == [first, second, third]
        assert [r.text_content for r in profile.representative_samples] == ["Waves.", "Gulls."]
        assert profile.updated_at >= profile.created_at

    def test_word_lists_survive_recompute(self, service, store):
        """Avoid/prefer lists on a stored profile are kept when it is updated."""
        created = service.create_style_profile("Shore", [add_sample(service)])
        profile = store.get_profile(created.id)
        profile.parameters.vocabulary.avoid = ["very"]
        profile.parameters.vocabulary.prefer = ["crisp"]
        profile.parameters.devices.avoid = ["puns"]
        store.save_profile(profile)

        updated = service.create_style_profile(
            "Shore", [add_sample(service, THIRD_PERSON)], profile_id=created.id, add_to_existing=True
        )

        assert updated.parameters.vocabulary.avoid == ["very"]
        assert updated.parameters.vocabulary.prefer == ["crisp"]
        assert updated.parameters.devices.avoid == ["puns"]
        guidance = service.get_style_profile(created.id).style_guidance
        assert "- Avoid these terms: very\n" in guidance
        assert "- Avoid these devices: puns\n" in guidance

    def test_replace_members(self, service, store):
        """Without adding, the new samples replace the members."""
        first = add_sample(service)
        created = service.create_style_profile(
            "Shore", [first], description="Seaside", comparable_authors=["Mary Oliver"]
        )

        second = add_sample(service, THIRD_PERSON)
        replaced = service.create_style_profile("Harbor", [second], profile_id=created.id)

        assert replaced.action == "replaced"
        assert replaced.sample_count == 1
        assert replaced.parameters.narrative.pov == "third_person"
        assert replaced.comparable_authors == []

        profile = store.get_profile(created.id)
        assert profile.name == "Harbor"
        assert profile.description == "Seaside"
        assert profile.sample_ids == [second]


class TestGetStyleProfile:
    """Test profile retrieval."""

    @pytest.fixture
    def profile_id(self, service):
        ids = [add_sample(service, title=f"Part {i}") for i in range(1, 5)]
        return service.create_style_profile(
            "Shore",
            ids,
            comparable_authors=["Mary Oliver"],
            user_comments="Keep it calm.",
            representative_samples=[RepresentativeSample(text_content="Waves.", description="Tide")],
        ).id

    def test_guidance(self, service, profile_id):
        """Guidance includes authors and notes."""
        view = service.get_style_profile(profile_id)

        assert view.profile.name == "Shore"
        assert view.style_guidance.startswith("# Style Guidance\n\n")
        assert "- Emulate the style of: Mary Oliver" in view.style_guidance
        assert view.style_guidance.endswith("## Additional Notes\nKeep it calm.\n\n")
        assert view.examples == []

    def test_without_notes(self, service, profile_id):
        """Guidance can be left out."""
        view = service.get_style_profile(profile_id, include_style_notes=False)
        assert view.style_guidance is None
        assert "style_guidance" not in view.to_dict()

    def test_examples_are_limited(self, service, profile_id):
        """At most three sample excerpts, then representatives."""
        view = service.get_style_profile(profile_id, include_examples=True)

        assert [e.title for e in view.examples] == ["Part 1", "Part 2", "Part 3", "Tide"]
        assert view.examples[0].excerpt == FIRST_PERSON + "..."
        assert view.examples[-1].excerpt == "Waves."

    def test_unknown_profile(self, service):
        """Unknown profiles are not found."""
        with pytest.raises(NotFoundError):
            service.get_style_profile("missing")

    def test_missing_id(self, service):
        """A profile id is required."""
        with pytest.raises(ValidationError):
            service.get_style_profile("")

    def test_store_failures_name_the_operation(self):
        """Store errors are prefixed with the failed operation."""
        class BrokenStore(InMemoryStyleStore):
            def get_profile(self, profile_id):
                raise PersistenceError("disk full")

        service = StyleService(BrokenStore(), settings=Settings(store_backend="memory"))
        with pytest.raises(PersistenceError, match="Failed to retrieve style profile: disk full"):
            service.get_style_profile("p-1")


class TestWriteInStyle:
    """Test writing briefs."""

    @pytest.fixture
    def profile_id(self, service):
        ids = [add_sample(service, title=f"Part {i}") for i in range(1, 4)]
        reps = [
            RepresentativeSample(text_content=f"Passage {i}.", description=None if i == 1 else f"Rep {i}")
            for i in range(1, 5)
        ]
        return service.create_style_profile("Shore", ids, representative_samples=reps).id

    def test_brief(self, service, profile_id):
        """The brief carries guidance, length and limited examples."""
        brief = service.write_in_style("A storm arrives", profile_id, length=300)

        assert brief.profile_name == "Shore"
        assert brief.writing_prompt == "A storm arrives"
        assert brief.length_instruction == "Write approximately 300 words."
        assert brief.style_guidance.startswith("# Style Guidance")
        assert [e.title for e in brief.examples] == [
            "Part 1", "Part 2", "Representative Sample", "Rep 2", "Rep 3"
        ]

    def test_without_length_or_notes(self, service, profile_id):
        """Length and guidance are optional."""
        brief = service.write_in_style("A storm arrives", profile_id, include_style_notes=False)
        assert brief.length_instruction == ""
        assert brief.style_guidance == ""

    def test_brief_dict(self, service, profile_id):
        """The brief dict includes parameters and examples."""
        d = service.write_in_style("A storm arrives", profile_id).to_dict()
        assert d["parameters"]["narrative"]["pov"] == "first_person"
        assert len(d["examples"]) == 5

    def test_validation(self, service, profile_id):
        """Prompt, profile id and a positive length are required."""
        with pytest.raises(ValidationError):
            service.write_in_style("", profile_id)
        with pytest.raises(ValidationError):
            service.write_in_style("A storm", None)
        with pytest.raises(ValidationError):
            service.write_in_style("A storm", profile_id, length=0)

    def test_unknown_profile(self, service):
        """Writing in an unknown profile fails."""
        with pytest.raises(NotFoundError):
            service.write_in_style("A storm", "missing")
