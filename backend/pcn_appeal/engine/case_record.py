from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from ..errors import DataIntegrityViolation

SCALAR_FIELDS = (
    "ticket_type",
    "category",
    "ticket_number",
    "vehicle_registration",
    "fine_amount",
    "issue_date",
    "due_date",
    "location",
    "reason",
    "description",
)


@dataclass
class CaseRecord:
    ticket_type: str | None = None
    category: str | None = None
    ticket_number: str | None = None
    vehicle_registration: str | None = None
    fine_amount: float | None = None
    issue_date: str | None = None  # ISO YYYY-MM-DD
    due_date: str | None = None
    location: str | None = None
    reason: str | None = None
    description: str | None = None
    evidence: list[str] = field(default_factory=list)
    selected_forms: list[str] = field(default_factory=list)
    form_fields: dict[str, dict[str, Any]] = field(default_factory=dict)
    form_documents: dict[str, str] = field(default_factory=dict)

    def write(self, name: str, value: Any) -> None:
        if name not in SCALAR_FIELDS:
            raise DataIntegrityViolation(f"Unknown case field {name!r}")
        if getattr(self, name) is not None:
            raise DataIntegrityViolation(f"Case field {name!r} is already set")
        setattr(self, name, value)

    def select_forms(self, forms: list[str]) -> None:
        if self.selected_forms:
            raise DataIntegrityViolation("Supplementary forms already selected")
        self.selected_forms = list(forms)

    def write_form_field(self, form: str, key: str, value: Any) -> None:
        fields = self.form_fields.setdefault(form, {})
        if key in fields:
            raise DataIntegrityViolation(f"{form} field {key!r} is already set")
        fields[key] = value

    def add_evidence(self, reference: str) -> None:
        self.evidence.append(reference)

    def to_dict(self) -> dict:
        return asdict(self)
