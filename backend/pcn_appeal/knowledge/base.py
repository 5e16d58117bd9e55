from __future__ import annotations

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class LegalFramework:
    act: str = ""
    regulation: str = ""
    section: str = ""
    deadline: str = ""


@dataclass(frozen=True)
class LetterTemplate:
    opening: str
    legal_argument: str
    evidence_section: str
    conclusion: str


@dataclass(frozen=True)
class GroundDefinition:
    id: str
    category: str  # "statutory", "mitigating", "procedural"
    section: str
    title: str
    description: str
    legal_strength: str  # "high", "medium", "low"
    evidence_required: tuple[str, ...]
    common_scenarios: tuple[str, ...]
    success_rate: int | None = None
    case_references: tuple[str, ...] = ()
    legal_precedents: tuple[str, ...] = ()
    legal_framework: LegalFramework | None = None
    template: LetterTemplate | None = None
    key_phrases: tuple[str, ...] = ()


@dataclass(frozen=True)
class TicketType:
    id: str
    name: str
    category: str  # "civil", "criminal", "private", "TEC"
    appeal_route: str  # "tribunal", "court", "company"
    authority: str
    time_limit: str
    description: str
    patterns: tuple[str, ...]
    examples: tuple[str, ...]
    fine_range: tuple[int, int]
    synonyms: tuple[str, ...] = ()
    forms: tuple[str, ...] = ()

    def matches(self, ticket_number: str) -> bool:
        return any(
            re.fullmatch(pattern, ticket_number, re.IGNORECASE)
            for pattern in self.patterns
        )


@dataclass(frozen=True)
class FormField:
    key: str
    prompt: str


@dataclass(frozen=True)
class CourtForm:
    id: str
    display_name: str
    purpose: str
    fields: tuple[FormField, ...]
    grounds: dict[int, str] = field(default_factory=dict)
    template: str = ""
