import asyncio

import pytest

from pcn_appeal.errors import (
    DataIntegrityViolation,
    ExternalCollaboratorFailure,
    SessionNotFound,
    ValidationError,
)

PCN_ANSWERS = [
    "1",
    "PCN12345678",
    "ab12 cde",
    "£65",
    "5/3/2024",
    "02/04/2024",
    "High Street, Camden",
]

TEC_ANSWERS = [
    "tec",
    "TEC12345678",
    "ab12 cde",
    "£195",
    "5/3/2024",
    "02/04/2024",
    "High Street, Camden",
    "I never received the notice",
    "The notice went to my old address after I moved house.",
]

FORM_ANSWERS = {
    "te7": [
        "Jane Smith",
        "1 High Street, London N1 1AA",
        "020 7946 0958",
        "jane@example.com",
        "2",
        "I moved house in January and the DVLA had my old address.",
    ],
    "te9": [
        "Jane Smith",
        "1 High Street, London N1 1AA",
        "020 7946 0958",
        "jane@example.com",
        "1",
        "No penalty charge notice ever reached me at my current address.",
    ],
}


def send(engine, session_id, text):
    return asyncio.run(engine.process_message(session_id, text))


def walk(engine, answers):
    session_id, _ = engine.start_session()
    result = None
    for answer in answers:
        result = send(engine, session_id, answer)
    return session_id, result


# --- Happy paths ---


def test_start_session_greets_with_ticket_menu(intake):
    session_id, greeting = intake.start_session()
    assert intake.sessions[session_id].state == "ticket_type_selection"
    assert "1. Penalty Charge Notice (PCN)" in greeting


def test_pcn_case_walks_every_stage_in_order(intake):
    session_id, _ = intake.start_session()
    expected = [
        "ticket",
        "vehicle_registration",
        "amount",
        "issue_date",
        "due_date",
        "location",
        "reason",
    ]
    for answer, state in zip(PCN_ANSWERS, expected):
        assert send(intake, session_id, answer)["state"] == state

    snapshot = intake.get_snapshot(session_id)
    assert snapshot["ticket_type"] == "pcn"
    assert snapshot["category"] == "civil"
    assert snapshot["ticket_number"] == "PCN12345678"
    assert snapshot["vehicle_registration"] == "AB12CDE"
    assert snapshot["fine_amount"] == 65.0
    assert snapshot["issue_date"] == "2024-03-05"
    assert snapshot["due_date"] == "2024-04-02"
    assert snapshot["location"] == "High Street, Camden"


def test_reason_number_maps_to_label_and_previews_estimate(intake):
    session_id, _ = walk(intake, PCN_ANSWERS)
    result = send(intake, session_id, "1")
    assert result["state"] == "description"
    assert intake.get_snapshot(session_id)["reason"] == "Invalid or unclear signage"
    assert "chance of success" in result["message"]
    assert result["preview"]["matched_grounds"][0]["id"] == "C10"


def test_generate_drafts_description_then_submits(intake, submitter):
    session_id, _ = walk(intake, PCN_ANSWERS + ["1"])
    result = send(intake, session_id, "generate")
    assert result["state"] == "evidence"
    description = intake.get_snapshot(session_id)["description"]
    assert "PCN12345678" in description

    intake.add_evidence(session_id, "Photographs of the faded sign")
    assert send(intake, session_id, "what now?")["state"] == "evidence"
    result = send(intake, session_id, "submit")
    assert result["state"] == "complete"
    assert result["complete"]

    case_id, payload = submitter.calls[0]
    assert case_id == session_id
    assert payload["evidence"] == ["Photographs of the faded sign"]
    assert payload["letter"].startswith("FORMAL REPRESENTATIONS")


def test_complete_session_asks_for_reset(intake):
    session_id, _ = walk(intake, PCN_ANSWERS + ["1", "generate", "done"])
    result = send(intake, session_id, "hello?")
    assert result["state"] == "complete"
    assert "reset" in result["message"]


def test_tec_case_branches_to_form_selection(intake):
    _, result = walk(intake, TEC_ANSWERS)
    assert result["state"] == "form_selection"


def test_form_help_does_not_transition(intake):
    session_id, _ = walk(intake, TEC_ANSWERS)
    result = send(intake, session_id, "help")
    assert result["state"] == "form_selection"
    assert "TE9 is a witness statement" in result["message"]


def test_form_skip_goes_to_evidence(intake):
    session_id, _ = walk(intake, TEC_ANSWERS)
    assert send(intake, session_id, "skip")["state"] == "evidence"
    assert intake.get_snapshot(session_id)["selected_forms"] == []


def test_both_forms_are_filled_te7_first(intake):
    session_id, _ = walk(intake, TEC_ANSWERS)
    assert send(intake, session_id, "both")["state"] == "te7_form"

    for answer in FORM_ANSWERS["te7"]:
        result = send(intake, session_id, answer)
    assert result["state"] == "te9_form"
    assert "APPLICATION TO FILE A STATEMENT OUT OF TIME (TE7)" in result["message"]

    for answer in FORM_ANSWERS["te9"]:
        result = send(intake, session_id, answer)
    assert result["state"] == "evidence"

    snapshot = intake.get_snapshot(session_id)
    assert snapshot["selected_forms"] == ["te7", "te9"]
    assert snapshot["form_fields"]["te7"]["ground"] == 2
    assert "PENALTY CHARGE NUMBER: TEC12345678" in snapshot["form_documents"]["te9"]


def test_render_completed_form(intake, renderer):
    session_id, _ = walk(intake, TEC_ANSWERS + ["te7"] + FORM_ANSWERS["te7"])
    document = asyncio.run(intake.render_form(session_id, "te7"))
    assert document.startswith(b"%PDF")
    form, fields = renderer.calls[0]
    assert form == "te7"
    assert fields["name"] == "Jane Smith"
    assert fields["document"].startswith("APPLICATION TO FILE")


def test_render_unfinished_form_is_rejected(intake):
    session_id, _ = walk(intake, TEC_ANSWERS + ["te9", "Jane Smith"])
    with pytest.raises(ValidationError):
        asyncio.run(intake.render_form(session_id, "te9"))


# --- Validation and recovery ---


def test_invalid_ticket_number_stays_in_stage(intake):
    session_id, _ = walk(intake, ["1"])
    result = send(intake, session_id, "XYZ")
    assert result["state"] == "ticket"
    assert "doesn't look like a valid" in result["message"]
    assert intake.get_snapshot(session_id)["ticket_number"] is None


def test_impossible_date_stays_in_stage(intake):
    session_id, _ = walk(intake, PCN_ANSWERS[:4])
    result = send(intake, session_id, "31/02/2024")
    assert result["state"] == "issue_date"
    assert "isn't a real calendar date" in result["message"]


def test_ambiguous_ticket_type_reprompts_with_options(intake):
    session_id, _ = intake.start_session()
    result = send(intake, session_id, "speeding through a bus gate")
    assert result["state"] == "ticket_type_selection"
    assert "Speed Camera Notice (NIP)" in result["message"]


def test_bad_form_field_reprompts(intake):
    session_id, _ = walk(intake, TEC_ANSWERS + ["te9", "Jane Smith", "1 High Street, London N1 1AA"])
    result = send(intake, session_id, "12345")
    assert result["state"] == "te9_form"
    assert "10 to 13 digits" in result["message"]


def test_restart_during_form_clears_everything(intake):
    session_id, _ = walk(intake, TEC_ANSWERS + ["te9", "Jane Smith"])
    result = send(intake, session_id, "  Restart ")
    assert result["state"] == "ticket_type_selection"
    snapshot = intake.get_snapshot(session_id)
    assert snapshot["ticket_number"] is None
    assert snapshot["selected_forms"] == []
    assert snapshot["form_fields"] == {}
    assert intake.sessions[session_id].preview is None


def test_submission_failure_keeps_evidence_stage(failing_intake):
    session_id, _ = walk(failing_intake, PCN_ANSWERS + ["1", "generate"])
    result = send(failing_intake, session_id, "submit")
    assert result["state"] == "evidence"
    assert "try again" in result["message"]


def test_form_stage_without_tec_category_fails_loudly(intake):
    session_id, _ = walk(intake, PCN_ANSWERS)
    intake.sessions[session_id].state = "te7_form"
    with pytest.raises(DataIntegrityViolation):
        send(intake, session_id, "Jane Smith")


def test_every_stage_prompts_from_its_table_entry(intake):
    session_id, _ = walk(intake, TEC_ANSWERS)
    session = intake.sessions[session_id]
    for state, (_, _, prompt) in intake.stages.items():
        session.state = state
        assert prompt(session)

    session.state = "te9_form"
    assert intake._prompt(session).startswith("TE9 - Witness statement")
    session.state = "complete"
    assert "reset" in intake._prompt(session)


def test_unknown_session(intake):
    with pytest.raises(SessionNotFound):
        send(intake, "missing", "hello")


# --- Evidence, prediction and extraction ---


def test_blank_evidence_is_rejected(intake):
    session_id, _ = intake.start_session()
    with pytest.raises(ValidationError):
        intake.add_evidence(session_id, "   ")


def test_prediction_from_session(intake):
    session_id, _ = walk(intake, PCN_ANSWERS + ["1"])
    prediction = intake.get_prediction(session_id)
    assert 0.02 <= prediction["success_probability"] <= 0.98
    assert prediction["weights_version"] >= 1


def test_fresh_session_prediction_has_no_grounds(intake):
    session_id, _ = intake.start_session()
    prediction = intake.get_prediction(session_id)
    assert prediction["matched_grounds"] == []
    assert prediction["success_probability"] < 0.5


def test_accepted_extraction_is_offered_as_suggestion(intake):
    session_id, _ = walk(intake, ["1"])
    proposal = asyncio.run(intake.propose_extraction(session_id, b"jpeg", "notice.jpg"))
    assert proposal["patch"]["ticket_number"] == "PCN12345678"
    assert intake.get_snapshot(session_id)["ticket_number"] is None

    result = intake.resolve_extraction(session_id, accept=True)
    assert "Reply 'yes' to use it" in result["message"]

    assert send(intake, session_id, "yes")["state"] == "vehicle_registration"
    assert intake.get_snapshot(session_id)["ticket_number"] == "PCN12345678"

    for answer in ("AB12CDE", "65"):
        send(intake, session_id, answer)
    result = send(intake, session_id, "YES")
    assert result["state"] == "due_date"
    assert intake.get_snapshot(session_id)["issue_date"] == "2024-03-05"


def test_rejected_extraction_is_discarded(intake):
    session_id, _ = walk(intake, ["1"])
    asyncio.run(intake.propose_extraction(session_id, b"jpeg", "notice.jpg"))
    intake.resolve_extraction(session_id, accept=False)
    result = send(intake, session_id, "yes")
    assert result["state"] == "ticket"
    with pytest.raises(ValidationError):
        intake.resolve_extraction(session_id, accept=True)


def test_extraction_failure_propagates(failing_intake):
    session_id, _ = failing_intake.start_session()
    with pytest.raises(ExternalCollaboratorFailure):
        asyncio.run(failing_intake.propose_extraction(session_id, b"jpeg", "notice.jpg"))
