"""Sample loading."""

from storyverse.ingest.loader import LoadedSample, load_sample

__all__ = ["LoadedSample", "load_sample"]
