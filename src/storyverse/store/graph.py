"""Store samples, analyses and profiles in Neo4j."""

import json
import logging
from datetime import datetime
from typing import Optional

from neo4j import Driver, ManagedTransaction
from neo4j.exceptions import DriverError, Neo4jError

from storyverse.errors import PersistenceError, ValidationError
from storyverse.models import RepresentativeSample, StyleProfile, WritingSample
from storyverse.store.base import StyleStore
from storyverse.store.connection import get_driver, init_schema
from storyverse.style.analyzer import SampleAnalysis

logger = logging.getLogger(__name__)

SAMPLE_FIELDS = ["title", "content", "author", "sample_type", "tags", "project_id", "excerpt"]


class Neo4jStyleStore(StyleStore):
    """
    Graph-backed store.

    Layout:
        (:Sample)-[:HAS_ANALYSIS]->(:Analysis {data})
        (:Profile)-[:INCLUDES]->(:Sample)
        (:Profile)-[:REPRESENTED_BY]->(:RepresentativeSample)

    Nested records (analysis facets, profile parameters) are kept as JSON
    strings since node properties cannot hold maps.
    """

    def __init__(self, driver: Driver | None = None):
        """Initialize the store.

        Args:
            driver: Optional Neo4j driver (created from settings if not provided)
        """
        self._driver = driver
        self._initialized = False

    @property
    def driver(self) -> Driver:
        """Get the Neo4j driver, creating if needed."""
        if self._driver is None:
            self._driver = get_driver()
        return self._driver

    def initialize(self) -> None:
        """Create constraints and indexes once per store."""
        if not self._initialized:
            self._run(init_schema, self.driver, context="initialize schema")
            self._initialized = True

    def close(self) -> None:
        if self._driver is not None:
            self._driver.close()
            self._driver = None

    # Samples

    def create_sample(self, sample: WritingSample) -> WritingSample:
        query = """
        CREATE (s:Sample {id: $id})
        SET s += $props, s.created_at = $created_at
        """
        props = {key: getattr(sample, key) for key in SAMPLE_FIELDS}
        self._execute(
            query,
            context="save sample",
            id=sample.id,
            props=props,
            created_at=sample.created_at.isoformat(),
        )
        return sample

    def get_sample(self, sample_id: str) -> Optional[WritingSample]:
        samples = self.get_samples([sample_id])
        return samples[0] if samples else None

    def get_samples(self, sample_ids: list[str]) -> list[WritingSample]:
        query = "MATCH (s:Sample) WHERE s.id IN $ids RETURN s"
        records = self._execute(query, context="fetch samples", ids=list(sample_ids))

        found = {}
        for record in records:
            props = dict(record["s"])
            found[props["id"]] = WritingSample.model_validate(props)
        return [found[sid] for sid in sample_ids if sid in found]

    # Analyses

    def save_analysis(self, analysis: SampleAnalysis) -> SampleAnalysis:
        if not analysis.sample_id:
            raise ValidationError("An analysis needs a sample id to be stored")

        query = """
        MATCH (s:Sample {id: $sample_id})
        OPTIONAL MATCH (s)-[:HAS_ANALYSIS]->(old:Analysis)
        DETACH DELETE old
        WITH DISTINCT s
        CREATE (s)-[:HAS_ANALYSIS]->(:Analysis {
            sample_id: $sample_id,
            data: $data,
            created_at: $created_at
        })
        """
        self._execute(
            query,
            context="save analysis",
            sample_id=analysis.sample_id,
            data=analysis.to_json(indent=None),
            created_at=analysis.created_at.isoformat(),
        )
        return analysis

    def get_analyses(self, sample_ids: list[str]) -> list[SampleAnalysis]:
        query = "MATCH (a:Analysis) WHERE a.sample_id IN $ids RETURN a.data AS data"
        records = self._execute(query, context="fetch style analyses", ids=list(sample_ids))

        found = {}
        for record in records:
            analysis = SampleAnalysis.from_json(record["data"])
            found[analysis.sample_id] = analysis
        return [found[sid] for sid in sample_ids if sid in found]

    # Profiles

    def get_profile(self, profile_id: str) -> Optional[StyleProfile]:
        query = """
        MATCH (p:Profile {id: $id})
        OPTIONAL MATCH (p)-[:INCLUDES]->(s:Sample)
        WITH p, collect(s.id) AS sample_ids
        OPTIONAL MATCH (p)-[:REPRESENTED_BY]->(r:RepresentativeSample)
        WITH p, sample_ids, r ORDER BY r.position
        RETURN p, sample_ids,
               collect(r {.text_content, .description}) AS representatives
        """
        records = self._execute(query, context="fetch style profile", id=profile_id)
        if not records:
            return None

        record = records[0]
        props = dict(record["p"])
        props["parameters"] = json.loads(props.get("parameters") or "{}")
        props["sample_ids"] = record["sample_ids"]
        props["representative_samples"] = [
            RepresentativeSample.model_validate(r) for r in record["representatives"]
        ]
        return StyleProfile.model_validate(props)

    def save_profile(self, profile: StyleProfile) -> StyleProfile:
        self.initialize()
        self._run(self._session_write, self._write_profile, profile, context="save style profile")
        logger.info("Stored profile %s with %d samples", profile.id, len(profile.sample_ids))
        return profile

    @staticmethod
    def _write_profile(tx: ManagedTransaction, profile: StyleProfile) -> None:
        props = {
            "name": profile.name,
            "description": profile.description,
            "parameters": json.dumps(profile.parameters.to_dict()),
            "genre": profile.genre,
            "comparable_authors": profile.comparable_authors,
            "user_comments": profile.user_comments,
            "project_id": profile.project_id,
            "created_at": profile.created_at.isoformat(),
            "updated_at": profile.updated_at.isoformat(),
        }
        tx.run("MERGE (p:Profile {id: $id}) SET p += $props", id=profile.id, props=props)

        # Membership and exemplars are replaced wholesale
        tx.run(
            """
            MATCH (p:Profile {id: $id})-[r:INCLUDES]->()
            DELETE r
            """,
            id=profile.id,
        )
        tx.run(
            """
            MATCH (p:Profile {id: $id})
            UNWIND $sample_ids AS sid
            MATCH (s:Sample {id: sid})
            MERGE (p)-[:INCLUDES]->(s)
            """,
            id=profile.id,
            sample_ids=profile.sample_ids,
        )
        tx.run(
            """
            MATCH (p:Profile {id: $id})-[:REPRESENTED_BY]->(r:RepresentativeSample)
            DETACH DELETE r
            """,
            id=profile.id,
        )
        tx.run(
            """
            MATCH (p:Profile {id: $id})
            UNWIND $reps AS rep
            CREATE (p)-[:REPRESENTED_BY]->(:RepresentativeSample {
                text_content: rep.text_content,
                description: rep.description,
                position: rep.position
            })
            """,
            id=profile.id,
            reps=[
                {"text_content": r.text_content, "description": r.description, "position": i}
                for i, r in enumerate(profile.representative_samples)
            ],
        )

    # Plumbing

    def _session_write(self, work, *args) -> None:
        with self.driver.session() as session:
            session.execute_write(work, *args)

    def _execute(self, query: str, context: str, **params) -> list:
        def run() -> list:
            with self.driver.session() as session:
                return list(session.run(query, **params))

        self.initialize()
        return self._run(run, context=context)

    def _run(self, fn, *args, context: str):
        try:
            return fn(*args)
        except (Neo4jError, DriverError) as e:
            logger.error("Neo4j error during %s: %s", context, e)
            raise PersistenceError(f"Failed to {context}: {e}") from e
