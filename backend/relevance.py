"""Heritage relevance heuristic.

Favors recall: providers tag almost everything as establishment or
point_of_interest, so the keyword check on name and area does the real
discrimination.
"""

import config
from models import RawCandidate


def has_relevant_type(type_tags) -> bool:
    return any(t in config.RELEVANT_TYPES for t in type_tags)


def has_heritage_keyword(*texts: str | None) -> bool:
    folded = [t.casefold() for t in texts if t]
    return any(kw in text for kw in config.HERITAGE_KEYWORDS for text in folded)


def is_relevant(candidate: RawCandidate) -> bool:
    return has_relevant_type(candidate.type_tags) or has_heritage_keyword(
        candidate.display_name, candidate.area_name
    )
