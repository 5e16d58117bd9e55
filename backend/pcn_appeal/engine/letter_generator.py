from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from string import Template
from typing import TYPE_CHECKING

from ..knowledge import DEFAULT_TEMPLATES
from ..knowledge.base import CourtForm, GroundDefinition, LetterTemplate
from ..knowledge.forms import TEC_ADDRESS

if TYPE_CHECKING:
    from .case_record import CaseRecord
    from .matcher import MatchedGround

logger = logging.getLogger(__name__)

_DEFAULT_REGULATION = "Traffic Management Act 2004 (Part 6)"
_DEFAULT_DEADLINE = "28-day"


@dataclass
class AppealLetter:
    ground_id: str | None
    opening: str
    legal_argument: str
    evidence_section: str
    conclusion: str
    supporting_grounds: list[str] = field(default_factory=list)
    authorities: list[str] = field(default_factory=list)
    evidence: list[str] = field(default_factory=list)

    @property
    def body(self) -> str:
        return "\n\n".join(
            [self.opening, self.legal_argument, self.evidence_section, self.conclusion]
        )

    def render(self) -> str:
        parts = ["FORMAL REPRESENTATIONS", self.body]
        if self.authorities:
            parts.append(
                "AUTHORITIES CITED:\n" + "\n".join(f"• {item}" for item in self.authorities)
            )
        if self.supporting_grounds:
            parts.append(
                "SUPPORTING GROUNDS:\n"
                + "\n".join(f"• {line}" for line in self.supporting_grounds)
            )
        if self.evidence:
            parts.append(
                "EVIDENCE ENCLOSED:\n" + "\n".join(f"• {item}" for item in self.evidence)
            )
        parts.append("Yours faithfully,\n[Your name, address and contact details]")
        return "\n\n".join(parts)


def generate_letter(
    case: "CaseRecord", grounds: list["MatchedGround"]
) -> AppealLetter:
    """Fill the top ground's template with case fields.

    Grounds without their own template use their category's default, and a
    case with no matched grounds falls back to the mitigating default.
    """
    primary = grounds[0].ground if grounds else None
    template = _template_for(primary)
    slots = _build_slots(case, primary)

    supporting = [
        f"{m.ground.title} ({m.ground.legal_strength} strength): {m.ground.description}"
        for m in grounds[1:]
    ]

    letter = AppealLetter(
        ground_id=primary.id if primary else None,
        opening=_fill(template.opening, slots),
        legal_argument=_fill(template.legal_argument, slots),
        evidence_section=_fill(template.evidence_section, slots),
        conclusion=_fill(template.conclusion, slots),
        supporting_grounds=supporting,
        authorities=_authorities(primary),
        evidence=list(case.evidence),
    )
    logger.debug("Generated letter from ground %s", letter.ground_id)
    return letter


def render_form(
    form: CourtForm,
    fields: dict,
    case: "CaseRecord",
    as_of: date | None = None,
) -> str:
    ground_number = fields.get("ground")
    slots = _build_slots(case, None)
    slots.update(
        {
            "court_address": TEC_ADDRESS,
            "today": (as_of or date.today()).strftime("%d/%m/%Y"),
            "ground_number": str(ground_number) if ground_number else "[ground]",
            "ground_text": form.grounds.get(ground_number, "[ground]"),
        }
    )
    for key in ("name", "address", "phone", "email", "statement"):
        slots[key] = fields.get(key) or f"[{key}]"
    return _fill(form.template, slots)


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _authorities(ground: GroundDefinition | None) -> list[str]:
    if ground is None:
        return []
    return [*ground.legal_precedents, *ground.case_references]


def _template_for(ground: GroundDefinition | None) -> LetterTemplate:
    if ground is None:
        return DEFAULT_TEMPLATES["mitigating"]
    return ground.template or DEFAULT_TEMPLATES[ground.category]


def _build_slots(case: "CaseRecord", ground: GroundDefinition | None) -> dict[str, str]:
    framework = ground.legal_framework if ground else None
    evidence_list = (
        ", ".join(case.evidence) if case.evidence else "[evidence to be attached]"
    )
    return {
        "ticket_number": case.ticket_number or "[PCN number]",
        "issue_date": _display_date(case.issue_date) or "[date of issue]",
        "registration": case.vehicle_registration or "[vehicle registration]",
        "location": case.location or "[location]",
        "fine_amount": (
            f"£{case.fine_amount:.2f}" if case.fine_amount is not None else "[amount]"
        ),
        "reason": case.reason or "",
        "description": case.description or case.reason or "",
        "evidence_list": evidence_list,
        "authority": "[enforcement authority]",
        "ground_title": ground.title if ground else (case.reason or "compelling circumstances"),
        "regulation": (framework.regulation if framework and framework.regulation else _DEFAULT_REGULATION),
        "deadline": (framework.deadline if framework and framework.deadline else _DEFAULT_DEADLINE),
    }


def _fill(text: str, slots: dict[str, str]) -> str:
    return Template(text).safe_substitute(slots).strip()


def _display_date(iso_value: str | None) -> str | None:
    if not iso_value:
        return None
    try:
        return date.fromisoformat(iso_value).strftime("%d/%m/%Y")
    except ValueError:
        return iso_value
