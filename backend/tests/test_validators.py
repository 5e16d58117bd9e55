import pytest

from pcn_appeal.engine import validators
from pcn_appeal.errors import AmbiguousInputError, ValidationError
from pcn_appeal.knowledge.ticket_types import TICKET_TYPES

# --- Ticket type selection ---


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1", "pcn"),
        ("11", "unknown"),
        ("ULEZ", "ulez"),
        ("I got a parking ticket from the council", "pcn"),
        ("it's a private parking charge notice", "private_parking"),
        ("they sent me a TE9", "tec"),
        ("Not sure", "unknown"),
    ],
)
def test_parse_ticket_type(text, expected):
    assert validators.parse_ticket_type(text).id == expected


def test_ticket_type_tie_is_ambiguous():
    with pytest.raises(AmbiguousInputError) as exc:
        validators.parse_ticket_type("speeding through a bus gate")
    assert set(exc.value.options) == {"speed_camera", "bus_lane"}


def test_unrecognised_ticket_type_lists_every_option():
    with pytest.raises(AmbiguousInputError) as exc:
        validators.parse_ticket_type("banana")
    assert exc.value.options == list(TICKET_TYPES)
    assert "11. Other / Not Sure" in exc.value.prompt


# --- Case fields ---


def test_ticket_number_is_cleaned_and_checked_against_type():
    pcn = TICKET_TYPES["pcn"]
    assert validators.parse_ticket_number("pcn-123 456", pcn) == "PCN123456"
    with pytest.raises(ValidationError):
        validators.parse_ticket_number("12345", pcn)


def test_ticket_number_for_another_type_gets_a_hint():
    with pytest.raises(ValidationError) as exc:
        validators.parse_ticket_number("NOIP 123456789", TICKET_TYPES["pcn"])
    assert "It looks like a Speed Camera Notice (NIP) number" in exc.value.prompt

    with pytest.raises(ValidationError) as exc:
        validators.parse_ticket_number("--", TICKET_TYPES["pcn"])
    assert "It looks like" not in exc.value.prompt


def test_registration():
    assert validators.parse_registration(" ab12 cde ") == "AB12CDE"
    with pytest.raises(ValidationError):
        validators.parse_registration("AB 1")


@pytest.mark.parametrize(
    "text, expected",
    [("£60", 60.0), ("65.50 pounds", 65.5), ("£1,250.00", 1250.0), ("it was 130", 130.0)],
)
def test_amount(text, expected):
    assert validators.parse_amount(text) == expected


def test_amount_requires_a_number():
    with pytest.raises(ValidationError):
        validators.parse_amount("sixty")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("5/3/2024", "2024-03-05"),
        ("05/03/2024", "2024-03-05"),
        ("15-11-2023", "2023-11-15"),
        ("issued on 29/02/2024", "2024-02-29"),
    ],
)
def test_dates_become_iso(text, expected):
    assert validators.parse_date(text) == expected


@pytest.mark.parametrize(
    "text",
    ["31/02/2024", "13/13/2024", "2024-03-05", "yesterday", "12/03/20245", "112/03/2024"],
)
def test_invalid_dates(text):
    with pytest.raises(ValidationError):
        validators.parse_date(text)


def test_location():
    assert validators.parse_location("  Camden Road ") == "Camden Road"
    with pytest.raises(ValidationError):
        validators.parse_location("N1")


def test_reason_labels_and_free_text():
    assert validators.parse_reason("1") == "Invalid or unclear signage"
    assert validators.parse_reason("6") == "Payment system malfunction"
    assert validators.parse_reason("OTHER") == "Other circumstances"
    assert validators.parse_reason("The meter was broken") == "The meter was broken"
    with pytest.raises(ValidationError):
        validators.parse_reason("8")


def test_description():
    assert validators.is_generate_request(" Generate ")
    assert not validators.is_generate_request("please generate it")
    with pytest.raises(ValidationError):
        validators.parse_description("too short")


# --- Form selection and form fields ---


@pytest.mark.parametrize(
    "text, expected",
    [("TE7", "te7"), ("te9 please", "te9"), ("te7 and te9", "both"),
     ("both", "both"), ("skip", "skip"), ("help", "help")],
)
def test_form_selection(text, expected):
    assert validators.parse_form_selection(text) == expected


@pytest.mark.parametrize("text", ["hello", "skip te7"])
def test_form_selection_needs_one_choice(text):
    with pytest.raises(AmbiguousInputError):
        validators.parse_form_selection(text)


def test_phone_numbers():
    assert validators.parse_phone("+44 (0)20 7946 0958") == "+44 (0)20 7946 0958"
    assert validators.parse_phone("07700-900123") == "07700-900123"
    with pytest.raises(ValidationError):
        validators.parse_phone("12345")
    with pytest.raises(ValidationError):
        validators.parse_phone("0770090012a")


def test_email():
    assert validators.parse_email("jane@example.com") == "jane@example.com"
    with pytest.raises(ValidationError):
        validators.parse_email("jane@example")


def test_form_ground():
    assert validators.parse_form_ground(" 3 ") == 3
    for bad in ("0", "5", "two"):
        with pytest.raises(ValidationError):
            validators.parse_form_ground(bad)


def test_name_address_statement_lengths():
    with pytest.raises(ValidationError):
        validators.parse_name("J")
    with pytest.raises(ValidationError):
        validators.parse_address("1 High St")
    with pytest.raises(ValidationError):
        validators.parse_statement("I paid it.")
    assert validators.parse_address("1 High Street, N1 1AA") == "1 High Street, N1 1AA"
