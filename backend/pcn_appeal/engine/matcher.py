from __future__ import annotations

from dataclasses import dataclass

from ..knowledge import GROUND_ORDER, GROUNDS_BY_ID, search_grounds
from ..knowledge.base import GroundDefinition

SEARCH_SEED_WEIGHT = 0.6
MIN_CONFIDENCE = 0.5

# keyword -> (ground ids, weight). Matched as lower-case substrings.
KEYWORD_TABLE: dict[str, tuple[tuple[str, ...], float]] = {
    # payment and permits
    "paid": (("A2", "D19"), 0.95),
    "already paid": (("D19",), 0.95),
    "payment": (("A2",), 0.7),
    "ticket displayed": (("A2",), 0.85),
    "permit": (("A2",), 0.9),
    "receipt": (("A2", "D19"), 0.8),
    "blue badge": (("A2",), 0.95),
    "disabled": (("A2", "A6"), 0.9),
    "disability": (("A2", "A6"), 0.85),
    "grace period": (("A4",), 0.95),
    "few minutes": (("A4",), 0.75),
    # signs and markings
    "sign": (("C10", "C11", "C14"), 0.8),
    "faded": (("C10", "C12"), 0.9),
    "illegible": (("C10",), 0.9),
    "no signs": (("C10",), 0.95),
    "missing sign": (("C10",), 0.95),
    "confusing": (("C10", "C12"), 0.8),
    "obscured": (("C11",), 0.9),
    "hidden": (("C11",), 0.85),
    "overgrown": (("C11",), 0.85),
    "markings": (("C12",), 0.85),
    "yellow line": (("C12",), 0.8),
    "bay lines": (("C12",), 0.85),
    "cctv": (("C13",), 0.7),
    "anpr": (("C13",), 0.75),
    "temporary": (("C14",), 0.8),
    "roadworks": (("C14",), 0.8),
    "suspended": (("C14",), 0.75),
    # loading and passengers
    "loading": (("A5",), 0.8),
    "unloading": (("A5",), 0.85),
    "delivery": (("A5",), 0.75),
    "passenger": (("A6",), 0.75),
    "drop off": (("A6",), 0.75),
    "dropping off": (("A6",), 0.75),
    "pick up": (("A6",), 0.7),
    # ownership and notice details
    "sold": (("B7",), 0.85),
    "new owner": (("B7",), 0.9),
    "stolen": (("B8",), 0.95),
    "cloned": (("B8",), 0.9),
    "hire car": (("B9",), 0.85),
    "rental": (("B9",), 0.85),
    "wrong registration": (("A3",), 0.9),
    "wrong date": (("A3",), 0.85),
    "incorrect": (("A3", "D17"), 0.75),
    "late notice": (("D15",), 0.8),
    "14 days": (("D15",), 0.75),
    "overcharged": (("D16",), 0.85),
    "wrong amount": (("D16",), 0.85),
    "notice to owner": (("D17",), 0.6),
    "traffic regulation order": (("D18",), 0.8),
    # medical
    "medical": (("E20", "E21"), 0.8),
    "hospital": (("E21",), 0.85),
    "ambulance": (("E21",), 0.9),
    "emergency": (("E21", "G30"), 0.8),
    "taken ill": (("E20",), 0.9),
    "seizure": (("E20",), 0.9),
    "nurse": (("E22",), 0.8),
    "doctor": (("E22",), 0.75),
    # vehicle
    "breakdown": (("F23",), 0.85),
    "broke down": (("F23",), 0.85),
    "broken down": (("F23",), 0.85),
    "puncture": (("F23",), 0.85),
    "flat tyre": (("F23",), 0.85),
    "fault": (("F23", "G27"), 0.7),
    "accident": (("F24",), 0.8),
    "crash": (("F24",), 0.8),
    # other compelling reasons
    "funeral": (("G25",), 0.8),
    "bereavement": (("G25",), 0.8),
    "police officer": (("G26",), 0.8),
    "told to park": (("G26",), 0.85),
    "directed": (("G26",), 0.75),
    "machine": (("G27",), 0.8),
    "malfunction": (("G27",), 0.9),
    "out of order": (("G27",), 0.9),
    "change for": (("G28",), 0.7),
    "robbed": (("G29",), 0.85),
    "mugged": (("G29",), 0.85),
    "assaulted": (("G29",), 0.85),
    "first aid": (("G30",), 0.75),
}

HIGH_CONFIDENCE_KEYWORDS = ("receipt", "photograph", "medical", "disabled", "paid")


@dataclass(frozen=True)
class MatchedGround:
    ground: GroundDefinition
    confidence: float


def build_search_text(description: str, circumstances: list[str] | tuple[str, ...]) -> str:
    return " ".join([description, *circumstances])


def match_grounds(text: str) -> list[MatchedGround]:
    """Rank catalog grounds against free text.

    Catalog search hits are seeded at 0.6, every keyword present raises its
    grounds to the highest weight seen, anything under 0.5 is dropped, and the
    rest is sorted by weight with catalog order breaking ties.
    """
    lowered = text.strip().lower()
    weights: dict[str, float] = {}
    if not lowered:
        return []

    for ground in search_grounds(lowered):
        weights[ground.id] = SEARCH_SEED_WEIGHT

    for keyword, (ground_ids, weight) in KEYWORD_TABLE.items():
        if keyword in lowered:
            for ground_id in ground_ids:
                weights[ground_id] = max(weights.get(ground_id, 0.0), weight)

    kept = [(gid, w) for gid, w in weights.items() if w >= MIN_CONFIDENCE]
    kept.sort(key=lambda item: (-item[1], GROUND_ORDER[item[0]]))
    return [MatchedGround(GROUNDS_BY_ID[gid], w) for gid, w in kept]


def count_high_confidence_keywords(description: str) -> int:
    lowered = description.lower()
    return sum(1 for keyword in HIGH_CONFIDENCE_KEYWORDS if keyword in lowered)
