"""Per-field validators for the intake conversation.

Each validator takes the raw user text and returns the normalised value, or
raises ValidationError carrying the corrective prompt for the user.
"""

from __future__ import annotations

import re
from datetime import date

from ..errors import AmbiguousInputError, ValidationError
from ..knowledge.base import TicketType
from ..knowledge.ticket_types import (
    TICKET_TYPES,
    detect_ticket_type,
    get_ticket_type,
    validate_ticket_number,
)

TICKET_TYPE_ORDER = list(TICKET_TYPES)

REASON_LABELS = {
    "1": "Invalid or unclear signage",
    "2": "Valid permit displayed",
    "3": "Medical emergency",
    "4": "Vehicle breakdown",
    "5": "Loading/unloading permitted",
    "6": "Payment system malfunction",
    "7": "Other circumstances",
}

FORM_CHOICES = ("te7", "te9", "both", "skip", "help")

_AMOUNT_RE = re.compile(r"\d[\d,]*(?:\.\d+)?")
_DATE_RE = re.compile(r"(?<!\d)(\d{1,2})[-/](\d{1,2})[-/](\d{4})(?!\d)")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_PHONE_STRIP_RE = re.compile(r"[\s\-()]")


def ticket_type_menu() -> str:
    return "\n".join(
        f"{n}. {TICKET_TYPES[type_id].name}"
        for n, type_id in enumerate(TICKET_TYPE_ORDER, start=1)
    )


def parse_ticket_type(text: str) -> TicketType:
    """Resolve a ticket type from a menu number, an id or a synonym.

    Synonyms match on word boundaries and the longest matching phrase wins.
    Two different types matching with equally long phrases is ambiguous.
    """
    cleaned = text.strip().lower()
    if cleaned.isdigit() and 1 <= int(cleaned) <= len(TICKET_TYPE_ORDER):
        return TICKET_TYPES[TICKET_TYPE_ORDER[int(cleaned) - 1]]
    by_id = get_ticket_type(cleaned)
    if by_id is not None:
        return by_id

    best_length = 0
    candidates: list[str] = []
    for type_id, ticket_type in TICKET_TYPES.items():
        for synonym in ticket_type.synonyms:
            if not re.search(rf"\b{re.escape(synonym)}\b", cleaned):
                continue
            if len(synonym) > best_length:
                best_length = len(synonym)
                candidates = [type_id]
            elif len(synonym) == best_length and type_id not in candidates:
                candidates.append(type_id)

    if len(candidates) == 1:
        return TICKET_TYPES[candidates[0]]

    options = candidates or TICKET_TYPE_ORDER
    prompt = (
        "I couldn't tell which kind of ticket that is. Reply with a number:\n"
        + "\n".join(
            f"{TICKET_TYPE_ORDER.index(type_id) + 1}. {TICKET_TYPES[type_id].name}"
            for type_id in options
        )
    )
    raise AmbiguousInputError(prompt, list(options))


def parse_ticket_number(text: str, ticket_type: TicketType) -> str:
    ticket_number = re.sub(r"[^A-Za-z0-9]", "", text).upper()
    if validate_ticket_number(ticket_number, ticket_type.id):
        return ticket_number
    examples = "\n".join(f"• {example}" for example in ticket_type.examples)
    prompt = (
        f"That doesn't look like a valid {ticket_type.name} number.\n"
        f"{ticket_type.description}. Examples:\n{examples}\n"
        "Please check your notice and enter the number again."
    )
    detected = detect_ticket_type(ticket_number)
    if detected.id not in (ticket_type.id, "unknown"):
        prompt += (
            f"\nIt looks like a {detected.name} number. "
            "Type 'restart' if you chose the wrong kind of ticket."
        )
    raise ValidationError(prompt)


def parse_registration(text: str) -> str:
    registration = re.sub(r"\s+", "", text).upper()
    if len(registration) >= 5:
        return registration
    raise ValidationError(
        "Please provide a valid vehicle registration number (e.g. AB12 CDE)."
    )


def parse_amount(text: str) -> float:
    match = _AMOUNT_RE.search(text)
    if match is None:
        raise ValidationError(
            "I need the fine amount from your notice (e.g. 60 or £60.00)."
        )
    return float(match.group(0).replace(",", ""))


def parse_date(text: str, label: str = "date") -> str:
    """D/M/YYYY or D-M-YYYY to ISO YYYY-MM-DD, rejecting impossible dates."""
    match = _DATE_RE.search(text)
    if match is None:
        raise ValidationError(
            f"Please provide the {label} in DD/MM/YYYY format (e.g. 15/03/2024)."
        )
    day, month, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        raise ValidationError(
            f"{match.group(0)} isn't a real calendar date. "
            f"Please provide the {label} in DD/MM/YYYY format."
        ) from None


def parse_location(text: str) -> str:
    location = text.strip()
    if len(location) >= 5:
        return location
    raise ValidationError(
        'Please provide a more specific location (e.g. "High Street, Birmingham").'
    )


def parse_reason(text: str) -> str:
    cleaned = text.strip()
    if cleaned in REASON_LABELS:
        return REASON_LABELS[cleaned]
    if cleaned.lower() == "other":
        return REASON_LABELS["7"]
    if len(cleaned) >= 10:
        return cleaned
    raise ValidationError(
        "Please choose a number from 1-7 or describe your reason in a sentence."
    )


def is_generate_request(text: str) -> bool:
    return text.strip().lower() == "generate"


def parse_description(text: str) -> str:
    description = text.strip()
    if len(description) >= 20:
        return description
    raise ValidationError(
        "Please provide a more detailed description (at least 20 characters) "
        "or type 'generate' and I'll draft one for you."
    )


def parse_form_selection(text: str) -> str:
    lowered = text.strip().lower()
    found = {choice for choice in FORM_CHOICES if re.search(rf"\b{choice}\b", lowered)}
    if {"te7", "te9"} <= found:
        found -= {"te7", "te9"}
        found.add("both")
    if len(found) == 1:
        return found.pop()
    raise AmbiguousInputError(
        "Which court form do you need? Reply te7, te9, both, skip or help.",
        list(FORM_CHOICES),
    )


# ------------------------------------------------------------------
# Court form fields
# ------------------------------------------------------------------


def parse_name(text: str) -> str:
    name = text.strip()
    if len(name) >= 2:
        return name
    raise ValidationError("Please enter your full name.")


def parse_address(text: str) -> str:
    address = text.strip()
    if len(address) >= 10:
        return address
    raise ValidationError("Please enter your full address, including postcode.")


def parse_phone(text: str) -> str:
    phone = _PHONE_STRIP_RE.sub("", text.strip())
    digits = phone[1:] if phone.startswith("+") else phone
    if digits.isdigit() and 10 <= len(digits) <= 13:
        return text.strip()
    raise ValidationError("Please enter a phone number of 10 to 13 digits.")


def parse_email(text: str) -> str:
    email = text.strip()
    if _EMAIL_RE.match(email):
        return email
    raise ValidationError("Please enter a valid email address (e.g. name@example.com).")


def parse_form_ground(text: str) -> int:
    cleaned = text.strip()
    if cleaned.isdigit() and 1 <= int(cleaned) <= 4:
        return int(cleaned)
    raise ValidationError("Please reply with the number of your ground, 1 to 4.")


def parse_statement(text: str) -> str:
    statement = text.strip()
    if len(statement) >= 20:
        return statement
    raise ValidationError("Please give a little more detail (at least 20 characters).")


FORM_FIELD_PARSERS = {
    "name": parse_name,
    "address": parse_address,
    "phone": parse_phone,
    "email": parse_email,
    "ground": parse_form_ground,
    "statement": parse_statement,
}
