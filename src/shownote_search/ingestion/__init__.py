"""Feed item ingestion into the store."""

from .ingestor import EpisodeIngestor, derive_episode_number

__all__ = ["EpisodeIngestor", "derive_episode_number"]
