"""Query building, result shaping and result loading."""

from .controller import ResultsController, ResultsState
from .debounce import SuggestionDebouncer
from .service import SearchError, SearchService

__all__ = [
    "ResultsController",
    "ResultsState",
    "SearchError",
    "SearchService",
    "SuggestionDebouncer",
]
