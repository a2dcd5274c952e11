from app.models.location import Location
from app.models.suggestion_term import SuggestionTerm

__all__ = [
    "Location",
    "SuggestionTerm",
]
