from .base import GroundDefinition
from .forms import COURT_FORMS
from .grounds import APPEAL_GROUNDS, DEFAULT_TEMPLATES
from .ticket_types import TICKET_TYPES

GROUNDS_BY_ID: dict[str, GroundDefinition] = {g.id: g for g in APPEAL_GROUNDS}

# Declaration order, used to break ties between equally weighted matches.
GROUND_ORDER: dict[str, int] = {g.id: i for i, g in enumerate(APPEAL_GROUNDS)}


def get_ground(ground_id: str) -> GroundDefinition | None:
    return GROUNDS_BY_ID.get(ground_id)


def grounds_by_category(category: str) -> list[GroundDefinition]:
    return [g for g in APPEAL_GROUNDS if g.category == category]


def strongest_grounds() -> list[GroundDefinition]:
    return [g for g in APPEAL_GROUNDS if g.legal_strength == "high"]


def search_grounds(query: str) -> list[GroundDefinition]:
    """Grounds whose title, description or a scenario contains the query."""
    term = query.strip().lower()
    if not term:
        return []
    return [
        g
        for g in APPEAL_GROUNDS
        if term in g.title.lower()
        or term in g.description.lower()
        or any(term in s.lower() for s in g.common_scenarios)
    ]
