from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from ..knowledge.base import GroundDefinition
from .case_record import CaseRecord
from .letter_generator import AppealLetter, generate_letter
from .matcher import (
    MatchedGround,
    build_search_text,
    count_high_confidence_keywords,
    match_grounds,
)
from .weights import WeightTable, registry

logger = logging.getLogger(__name__)

STRENGTH_SCORES = {"high": 0.85, "medium": 0.55, "low": 0.25}
NO_GROUNDS_STRENGTH = 0.15
DEFAULT_EVIDENCE_SCORE = 0.5

EVIDENCE_QUALITY = {
    "photographs": 0.8,
    "video footage": 0.9,
    "receipts": 0.95,
    "parking ticket": 0.85,
    "medical records": 0.9,
    "witness statements": 0.7,
    "correspondence": 0.6,
    "bank statements": 0.8,
    "timestamped evidence": 0.9,
    "professional documentation": 0.85,
}

COUNCIL_MULTIPLIERS = {
    "Westminster": 0.9,
    "Camden": 0.95,
    "Islington": 1.0,
    "Southwark": 1.05,
    "Lambeth": 1.0,
}

SECTION_ACTIONS = {
    "The Contravention Did Not Occur": "Gather all payment evidence and timestamps",
    "Issues with Vehicle Ownership": "Collect ownership and DVLA documents",
    "Problems with Signs and Road Markings": "Take current photographs of parking signage",
    "Procedural or Administrative Errors": "Compare the PCN against the statutory requirements",
    "Medical Emergencies": "Document emergency circumstances with official records",
    "Vehicle-Related Issues": "Obtain breakdown or accident reference numbers",
    "Other Compelling Reasons": "Get written confirmation from anyone involved",
}


@dataclass
class AppealInput:
    description: str
    circumstances: list[str]
    location: str
    incident_date: date
    evidence: list[str] = field(default_factory=list)
    previous_attempts: int = 0
    pcn_amount: float | None = None
    council_name: str | None = None


@dataclass
class PredictionResult:
    success_probability: float
    confidence: float
    matched_grounds: list[MatchedGround]
    recommended_grounds: list[GroundDefinition]
    key_factors: list[str]
    evidence_gaps: list[str]
    risk_factors: list[str]
    legal_strategy: str
    priority_actions: list[str]
    letter: AppealLetter
    components: dict[str, float]
    weights_version: int

    def to_dict(self) -> dict:
        return {
            "success_probability": self.success_probability,
            "confidence": self.confidence,
            "matched_grounds": [
                {"id": m.ground.id, "title": m.ground.title, "confidence": m.confidence}
                for m in self.matched_grounds
            ],
            "recommended_grounds": [
                {
                    "id": g.id,
                    "title": g.title,
                    "category": g.category,
                    "legal_strength": g.legal_strength,
                }
                for g in self.recommended_grounds
            ],
            "key_factors": self.key_factors,
            "evidence_gaps": self.evidence_gaps,
            "risk_factors": self.risk_factors,
            "legal_strategy": self.legal_strategy,
            "priority_actions": self.priority_actions,
            "appeal_letter": self.letter.render(),
            "components": self.components,
            "weights_version": self.weights_version,
        }


def predict(
    appeal: AppealInput,
    *,
    as_of: date | None = None,
    weights: WeightTable | None = None,
    case: CaseRecord | None = None,
) -> PredictionResult:
    """Estimate the chance an appeal succeeds. Deterministic for a given as_of and weights."""
    as_of = as_of or date.today()
    weights = weights or registry.current()

    matches = match_grounds(build_search_text(appeal.description, appeal.circumstances))
    grounds = [m.ground for m in matches]
    days = days_since(appeal.incident_date, as_of)

    strength = legal_strength(grounds, weights)
    evidence_score = evidence_quality(appeal.evidence, grounds)
    timing = timing_score(days)
    attempts = attempt_penalty(appeal.previous_attempts)
    location = location_multiplier(appeal.council_name or detect_council(appeal.location))

    probability = (
        strength
        * (1 + weights.evidence_quality * evidence_score)
        * (1 + weights.timing * timing)
        * attempts
        * location
    )
    probability = min(0.98, max(0.02, probability))
    confidence = confidence_score(appeal, grounds)

    if case is None:
        case = _case_from_input(appeal)

    high = [g for g in grounds if g.legal_strength == "high"]
    medium = [g for g in grounds if g.legal_strength == "medium"]

    logger.info(
        "Prediction %.1f%% (confidence %.1f%%, %d grounds, weights v%d)",
        probability * 100,
        confidence * 100,
        len(grounds),
        weights.version,
    )

    return PredictionResult(
        success_probability=probability,
        confidence=confidence,
        matched_grounds=matches,
        recommended_grounds=(high + medium)[:3],
        key_factors=_key_factors(appeal, grounds, days),
        evidence_gaps=_evidence_gaps(appeal.evidence, grounds),
        risk_factors=_risk_factors(appeal, grounds, days),
        legal_strategy=_legal_strategy(grounds),
        priority_actions=_priority_actions(appeal, grounds, days),
        letter=generate_letter(case, matches),
        components={
            "legal_strength": strength,
            "evidence_quality": evidence_score,
            "timing": timing,
            "attempt_penalty": attempts,
            "location_multiplier": location,
        },
        weights_version=weights.version,
    )


def predict_case(
    case: CaseRecord,
    *,
    as_of: date | None = None,
    weights: WeightTable | None = None,
) -> PredictionResult:
    as_of = as_of or date.today()
    return predict(appeal_input_from_case(case, as_of), as_of=as_of, weights=weights, case=case)


def appeal_input_from_case(case: CaseRecord, as_of: date) -> AppealInput:
    incident = date.fromisoformat(case.issue_date) if case.issue_date else as_of
    return AppealInput(
        description=case.description or case.reason or "",
        circumstances=[case.reason] if case.reason else [],
        location=case.location or "",
        incident_date=incident,
        evidence=list(case.evidence),
        pcn_amount=case.fine_amount,
    )


# ------------------------------------------------------------------
# Components
# ------------------------------------------------------------------


def ground_base_score(ground: GroundDefinition, weights: WeightTable) -> float:
    bonus = weights.statutory_bonus if ground.category == "statutory" else 0.0
    return STRENGTH_SCORES[ground.legal_strength] + bonus


def legal_strength(grounds: list[GroundDefinition], weights: WeightTable) -> float:
    if not grounds:
        return NO_GROUNDS_STRENGTH
    scores = [ground_base_score(g, weights) for g in grounds]
    combined = min(1.0, len(scores) * 0.1)
    raw = max(scores) * 0.6 + (sum(scores) / len(scores)) * 0.3 + combined * 0.1
    return raw * weights.legal_strength


def required_evidence(grounds: list[GroundDefinition]) -> list[str]:
    seen: dict[str, None] = {}
    for ground in grounds:
        for item in ground.evidence_required:
            seen.setdefault(item.lower(), None)
    return list(seen)


def evidence_matches(required: str, available: str) -> bool:
    # Containment in either direction.
    required = required.lower()
    available = available.lower()
    return required in available or available in required


def evidence_quality(available: list[str], grounds: list[GroundDefinition]) -> float:
    required = required_evidence(grounds)
    if not required:
        return 0.0
    declared = [a.strip().lower() for a in available if a and a.strip()]

    total = 0.0
    for item in required:
        best = 0.0
        for candidate in declared:
            if not evidence_matches(item, candidate):
                continue
            score = DEFAULT_EVIDENCE_SCORE
            for evidence_type, weight in EVIDENCE_QUALITY.items():
                if evidence_type in candidate:
                    score = max(score, weight)
            best = max(best, score)
        total += best
    return total / len(required)


def days_since(incident: date, as_of: date) -> int:
    return max(0, (as_of - incident).days)


def timing_score(days: int) -> float:
    if days <= 14:
        return 1.0
    if days <= 28:
        return 0.9
    if days <= 56:
        return 0.7
    if days <= 84:
        return 0.4
    if days <= 365:
        return 0.2
    return 0.05


def attempt_penalty(previous_attempts: int) -> float:
    if previous_attempts == 0:
        return 1.0
    return max(0.3, 1 - previous_attempts * 0.15)


def detect_council(location: str) -> str | None:
    lowered = (location or "").lower()
    for council in COUNCIL_MULTIPLIERS:
        if council.lower() in lowered:
            return council
    return None


def location_multiplier(council_name: str | None) -> float:
    if not council_name:
        return 1.0
    return COUNCIL_MULTIPLIERS.get(council_name, 1.0)


def confidence_score(appeal: AppealInput, grounds: list[GroundDefinition]) -> float:
    confidence = 0.3
    if len(appeal.description) > 150:
        confidence += 0.25
    if len(appeal.description) > 300:
        confidence += 0.15
    if len(appeal.circumstances) > 2:
        confidence += 0.15
    if len(appeal.circumstances) > 4:
        confidence += 0.10
    confidence += 0.2 * sum(1 for g in grounds if g.legal_strength == "high")
    if len(appeal.evidence) > 2:
        confidence += 0.2
    if len(appeal.evidence) > 4:
        confidence += 0.15
    confidence += 0.05 * count_high_confidence_keywords(appeal.description)
    return min(1.0, max(0.0, confidence))


# ------------------------------------------------------------------
# Narrative
# ------------------------------------------------------------------


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def _key_factors(appeal: AppealInput, grounds: list[GroundDefinition], days: int) -> list[str]:
    factors = []
    high = [g for g in grounds if g.legal_strength == "high"]
    if high:
        factors.append(f"{_plural(len(high), 'high-strength legal ground')} identified")
    statutory = [g for g in grounds if g.category == "statutory"]
    if statutory:
        factors.append(f"{_plural(len(statutory), 'statutory ground')} available")

    if len(appeal.evidence) > 3:
        factors.append("Comprehensive evidence collection")
    elif len(appeal.evidence) > 1:
        factors.append("Good evidence documentation")

    if days <= 14:
        factors.append("Optimal timing - within informal challenge period")
    elif days <= 28:
        factors.append("Good timing - formal appeal period")

    if appeal.previous_attempts == 0:
        factors.append("First appeal attempt (no previous rejection)")
    if len(appeal.description) > 200:
        factors.append("Detailed incident description provided")
    if len(appeal.circumstances) > 3:
        factors.append("Multiple supporting circumstances documented")
    return factors


def _evidence_gaps(available: list[str], grounds: list[GroundDefinition]) -> list[str]:
    if not grounds:
        return [
            "Incident photographs",
            "Any available documentation",
            "Witness contact details if available",
        ]
    declared = [a for a in available if a and a.strip()]
    priority: list[str] = []
    others: dict[str, None] = {}
    for ground in grounds:
        for index, item in enumerate(ground.evidence_required):
            if any(evidence_matches(item, a) for a in declared):
                continue
            if index == 0:
                priority.append(f"{item} (HIGH PRIORITY for {ground.id})")
            else:
                others.setdefault(item, None)
    return priority + list(others)


def _risk_factors(appeal: AppealInput, grounds: list[GroundDefinition], days: int) -> list[str]:
    risks = []
    if not grounds:
        risks.append("No clear legal grounds identified - case may lack merit")
    elif all(g.legal_strength == "low" for g in grounds):
        risks.append("Only low-strength legal grounds available")

    if len(appeal.evidence) < 2:
        risks.append("Limited evidence may significantly weaken the case")

    required_count = len(required_evidence(grounds))
    if len(appeal.evidence) < required_count * 0.5:
        risks.append(
            "Missing majority of required evidence "
            f"(have {len(appeal.evidence)}/{required_count})"
        )

    if days > 56:
        risks.append("Late appeal submission - may face procedural challenges")
    elif days > 28:
        risks.append("Appeal submitted after optimal timeframe")

    if appeal.previous_attempts > 0:
        risks.append(
            f"{_plural(appeal.previous_attempts, 'previous failed attempt')} may reduce credibility"
        )
    if appeal.previous_attempts > 2:
        risks.append("Multiple previous failures suggest fundamental case weakness")

    if len(appeal.description) < 100:
        risks.append("Brief description may not provide sufficient detail for assessment")
    if len(appeal.circumstances) < 2:
        risks.append("Limited contextual information may weaken case presentation")
    if appeal.pcn_amount and appeal.pcn_amount > 100:
        risks.append("High penalty amount - increased scrutiny likely")
    return risks


def _legal_strategy(grounds: list[GroundDefinition]) -> str:
    if not grounds:
        return (
            "No specific legal grounds identified. Consider reviewing the case "
            "details and gathering additional evidence."
        )

    statutory = [g for g in grounds if g.category != "mitigating"]
    mitigating = [g for g in grounds if g.category == "mitigating"]
    lines = ["## Legal Strategy", ""]

    if statutory:
        lead = statutory[0]
        lines.append("**Primary approach - statutory and procedural grounds:**")
        lines.append(
            f"Focus on {lead.title} as your main argument. "
            f"This is a {lead.legal_strength}-strength ground."
        )
        if lead.key_phrases:
            lines.append(
                "Use the wording: " + ", ".join(f"'{p}'" for p in lead.key_phrases) + "."
            )
        lines.append("")
        if len(statutory) > 1:
            lines.append("**Supporting arguments:**")
            lines.extend(f"• {g.title} ({g.legal_strength} strength)" for g in statutory[1:])
            lines.append("")

    if mitigating:
        lines.append("**Secondary approach - mitigating circumstances:**")
        lines.extend(f"• {g.title}: {g.description}" for g in mitigating)
        lines.append("")

    lines.extend(
        [
            "**Recommended order of arguments:**",
            "1. Lead with the strongest legal ground",
            "2. Present evidence systematically",
            "3. Address any potential counterarguments",
            "4. Close with a request for a specific remedy",
        ]
    )
    return "\n".join(lines)


def _priority_actions(appeal: AppealInput, grounds: list[GroundDefinition], days: int) -> list[str]:
    if not grounds:
        return [
            "Gather more specific details about the incident",
            "Review parking restrictions and signage",
            "Collect any available evidence (photos, receipts, etc.)",
            "Consider consulting a local parking appeal adviser",
        ]

    primary = grounds[0]
    declared = [a for a in appeal.evidence if a and a.strip()]
    actions = [
        f"Obtain: {item}"
        for item in primary.evidence_required
        if not any(evidence_matches(item, a) for a in declared)
    ]
    if days > 28:
        actions.append("Submit appeal urgently - approaching deadline")
    section_action = SECTION_ACTIONS.get(primary.section)
    if section_action:
        actions.append(section_action)
    actions.extend(
        [
            "Review appeal letter before submission",
            "Keep copies of all submitted documents",
            "Track appeal submission and response deadlines",
        ]
    )
    return actions


def _case_from_input(appeal: AppealInput) -> CaseRecord:
    return CaseRecord(
        fine_amount=appeal.pcn_amount,
        issue_date=appeal.incident_date.isoformat(),
        location=appeal.location or None,
        reason=appeal.circumstances[0] if appeal.circumstances else None,
        description=appeal.description or None,
        evidence=list(appeal.evidence),
    )
