"""Neo4j connection management."""

from neo4j import GraphDatabase, Driver
from neo4j.exceptions import ServiceUnavailable, AuthError

from storyverse.config import Settings, get_settings
from storyverse.errors import PersistenceError


def get_driver(settings: Settings | None = None) -> Driver:
    """Create a Neo4j driver from settings."""
    settings = settings or get_settings()

    try:
        return GraphDatabase.driver(
            settings.neo4j_uri,
            auth=(settings.neo4j_user, settings.neo4j_password),
        )
    except ValueError as e:
        raise PersistenceError(f"Invalid Neo4j URI {settings.neo4j_uri}: {e}") from e


def check_neo4j_connection(settings: Settings | None = None) -> bool:
    """Check if Neo4j is reachable and credentials are valid."""
    driver = get_driver(settings)

    try:
        driver.verify_connectivity()
        return True
    except (ServiceUnavailable, AuthError):
        return False
    finally:
        driver.close()


SCHEMA_STATEMENTS = [
    "CREATE CONSTRAINT sample_id IF NOT EXISTS FOR (s:Sample) REQUIRE s.id IS UNIQUE",
    "CREATE CONSTRAINT profile_id IF NOT EXISTS FOR (p:Profile) REQUIRE p.id IS UNIQUE",
    "CREATE CONSTRAINT analysis_sample IF NOT EXISTS FOR (a:Analysis) REQUIRE a.sample_id IS UNIQUE",
    "CREATE INDEX profile_name IF NOT EXISTS FOR (p:Profile) ON (p.name)",
]


def init_schema(driver: Driver) -> None:
    """Initialize graph schema (constraints and indexes)."""
    with driver.session() as session:
        for statement in SCHEMA_STATEMENTS:
            session.run(statement)
