"""Query matching, ranking and the search engine that combines them."""

from .engine import EpisodeInspection, SearchEngine
from .matcher import SearchMatcher
from .ranker import paginate, rank

__all__ = ["EpisodeInspection", "SearchEngine", "SearchMatcher", "paginate", "rank"]
