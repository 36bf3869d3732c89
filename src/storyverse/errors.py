"""StoryVerse error types."""


class StyleError(Exception):
    """Base error for all storyverse failures."""


class ValidationError(StyleError):
    """A required argument is missing or invalid."""


class EmptyInputError(StyleError):
    """Aggregation was requested over zero sample analyses."""


class NotFoundError(StyleError):
    """A profile or sample id could not be resolved by the store."""


class PersistenceError(StyleError):
    """The persistence backend failed."""
