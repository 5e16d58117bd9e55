from datetime import date

from pcn_appeal.engine.case_record import CaseRecord
from pcn_appeal.engine.letter_generator import generate_letter, render_form
from pcn_appeal.engine.matcher import match_grounds
from pcn_appeal.knowledge.forms import TE9_FORM, TE9_GROUNDS


def _case(**overrides):
    fields = {
        "ticket_number": "PCN12345678",
        "vehicle_registration": "AB12CDE",
        "fine_amount": 65.0,
        "issue_date": "2024-03-05",
        "location": "High Street, Camden",
        "reason": "Invalid or unclear signage",
        "evidence": ["Photographs of the sign", "Parking receipt"],
    }
    fields.update(overrides)
    return CaseRecord(**fields)


def test_uses_primary_ground_template():
    letter = generate_letter(_case(), match_grounds("the sign was faded"))
    assert letter.ground_id == "C10"
    assert "PCN12345678" in letter.opening
    assert "High Street, Camden" in letter.opening
    assert "Traffic Signs Regulations and General Directions 2016" in letter.legal_argument
    assert "Photographs of the sign, Parking receipt" in letter.evidence_section


def test_primary_ground_authorities_are_cited():
    letter = generate_letter(_case(), match_grounds("the sign was faded"))
    assert letter.authorities[0].startswith("Herron v Sunderland City Council (2011)")
    assert "TSRGD 2016" in letter.authorities
    assert "AUTHORITIES CITED:" in letter.render()

    no_grounds = generate_letter(_case(reason="I was helping a neighbour"), [])
    assert no_grounds.authorities == []
    assert "AUTHORITIES CITED:" not in no_grounds.render()


def test_supporting_grounds_and_evidence_are_listed():
    letter = generate_letter(_case(), match_grounds("the sign was faded"))
    assert len(letter.supporting_grounds) == 3
    assert letter.supporting_grounds[0].startswith("Road markings faded or incorrect (high strength)")
    rendered = letter.render()
    assert rendered.startswith("FORMAL REPRESENTATIONS")
    assert "• Parking receipt" in rendered


def test_ground_without_template_uses_category_default():
    letter = generate_letter(_case(), match_grounds("yellow line"))
    assert letter.ground_id == "C12"
    assert "Statutory ground: Road markings faded or incorrect." in letter.legal_argument
    assert "Traffic Management Act 2004 (Part 6)" in letter.legal_argument
    assert "05/03/2024" in letter.opening
    assert "£" not in letter.opening


def test_no_grounds_falls_back_to_mitigating_default():
    letter = generate_letter(_case(reason="I was helping a neighbour"), [])
    assert letter.ground_id is None
    assert "compelling circumstances" in letter.legal_argument
    assert letter.legal_argument.endswith("I was helping a neighbour")


def test_missing_fields_render_as_placeholders():
    letter = generate_letter(CaseRecord(), match_grounds("the sign was faded"))
    assert "[PCN number]" in letter.opening
    assert "[location]" in letter.opening
    assert "[evidence to be attached]" in letter.evidence_section
    assert "$" not in letter.body


def test_render_te9_form():
    fields = {
        "name": "Jane Smith",
        "address": "1 High Street, London N1 1AA",
        "phone": "020 7946 0958",
        "email": "jane@example.com",
        "ground": 4,
        "statement": "I paid the charge in full on 10 March.",
    }
    document = render_form(TE9_FORM, fields, _case(), as_of=date(2024, 6, 1))
    assert document.startswith("WITNESS STATEMENT - UNPAID PENALTY CHARGE (TE9)")
    assert "WITNESS: Jane Smith" in document
    assert "STATUTORY GROUND (4)" in document
    assert TE9_GROUNDS[4] in document
    assert "PENALTY AMOUNT: £65.00" in document
    assert "Date: 01/06/2024" in document


def test_render_form_with_missing_fields():
    document = render_form(TE9_FORM, {}, CaseRecord(), as_of=date(2024, 6, 1))
    assert "WITNESS: [name]" in document
    assert "STATUTORY GROUND ([ground])" in document
    assert "$" not in document
