from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Awaitable, Callable

from ..config import settings
from ..errors import (
    DataIntegrityViolation,
    ExternalCollaboratorFailure,
    SessionNotFound,
    ValidationError,
)
from ..knowledge.forms import COURT_FORMS
from ..knowledge.ticket_types import TICKET_TYPES, get_appeal_guidance
from . import validators
from .case_record import CaseRecord
from .collaborators import (
    BaseExtractor,
    BaseRenderer,
    BaseSubmitter,
    ExtractionResult,
    HttpDocumentRenderer,
    OpenAIExtractor,
    default_submitter,
)
from .letter_generator import render_form
from .scoring import predict_case

logger = logging.getLogger(__name__)

RESET_TOKENS = ("reset", "restart")
FINALIZE_TOKENS = ("skip", "continue", "done", "submit")
FORM_STAGES = {"te7": "te7_form", "te9": "te9_form"}

# Stage -> case field it fills. Accepted extraction suggestions are offered here.
STAGE_FIELDS = {
    "ticket": "ticket_number",
    "vehicle_registration": "vehicle_registration",
    "amount": "fine_amount",
    "issue_date": "issue_date",
    "due_date": "due_date",
    "location": "location",
}

StageParser = Callable[["SessionState", str], Any]
StageHandler = Callable[["SessionState", Any], Awaitable[str]]
StagePrompt = Callable[["SessionState"], str]


@dataclass
class SessionState:
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    state: str = "ticket_type_selection"
    case: CaseRecord = field(default_factory=CaseRecord)
    pending_extraction: ExtractionResult | None = None
    suggestions: dict[str, Any] = field(default_factory=dict)
    preview: dict | None = None
    letter: str | None = None
    submission: dict | None = None
    conversation_history: list[dict] = field(default_factory=list)

    def reset(self) -> None:
        self.state = "ticket_type_selection"
        self.case = CaseRecord()
        self.pending_extraction = None
        self.suggestions = {}
        self.preview = None
        self.letter = None
        self.submission = None


class IntakeEngine:
    def __init__(
        self,
        submitter: BaseSubmitter | None = None,
        renderer: BaseRenderer | None = None,
        extractor: BaseExtractor | None = None,
    ) -> None:
        self.sessions: dict[str, SessionState] = {}
        self.submitter = submitter or default_submitter()
        self.renderer = renderer or HttpDocumentRenderer()
        self.extractor = extractor or OpenAIExtractor()

        # stage -> (parser, on_success, prompt). Parsers raise ValidationError to re-prompt.
        self.stages: dict[str, tuple[StageParser, StageHandler, StagePrompt]] = {
            "ticket_type_selection": (
                self._parse_ticket_type,
                self._on_ticket_type,
                lambda s: (
                    "What kind of ticket did you get? Reply with a number or describe it:\n"
                    + validators.ticket_type_menu()
                ),
            ),
            "ticket": (self._parse_ticket, self._on_ticket, self._ticket_prompt),
            "vehicle_registration": (
                lambda s, text: validators.parse_registration(text),
                self._on_registration,
                lambda s: "What is your vehicle registration number? (e.g. AB12 CDE)",
            ),
            "amount": (
                lambda s, text: validators.parse_amount(text),
                self._on_amount,
                lambda s: "What is the fine amount? (e.g. £60.00 or just 60)",
            ),
            "issue_date": (
                lambda s, text: validators.parse_date(text, "issue date"),
                self._on_issue_date,
                lambda s: "When was the notice issued? Please use DD/MM/YYYY.",
            ),
            "due_date": (
                lambda s, text: validators.parse_date(text, "payment due date"),
                self._on_due_date,
                lambda s: "What is the payment due date? Please use DD/MM/YYYY.",
            ),
            "location": (
                lambda s, text: validators.parse_location(text),
                self._on_location,
                lambda s: 'Where did this happen? (e.g. "High Street Car Park, Birmingham")',
            ),
            "reason": (
                lambda s, text: validators.parse_reason(text),
                self._on_reason,
                lambda s: (
                    "Which reason best matches your situation?\n"
                    + "\n".join(f"{n}. {label}" for n, label in validators.REASON_LABELS.items())
                    + "\nType 1-7 or describe what happened."
                ),
            ),
            "description": (
                self._parse_description,
                self._on_description,
                lambda s: (
                    "Finally, describe what happened in your own words, or type "
                    "'generate' and I'll draft a formal appeal for you."
                ),
            ),
            "form_selection": (
                lambda s, text: validators.parse_form_selection(text),
                self._on_form_selection,
                lambda s: (
                    "As this is registered with the Traffic Enforcement Centre you may need "
                    "a court form. Reply te7, te9, both, skip, or help."
                ),
            ),
            "te7_form": (self._parse_form_field, self._on_form_field, self._form_prompt),
            "te9_form": (self._parse_form_field, self._on_form_field, self._form_prompt),
            "evidence": (
                self._parse_evidence,
                self._on_evidence,
                lambda s: (
                    "Upload any evidence you have (photos, receipts, letters). "
                    "When you're ready, type 'submit' to send your appeal."
                ),
            ),
        }

    def start_session(self) -> tuple[str, str]:
        session = SessionState()
        greeting = (
            f"Hi! I'm the {settings.service_name}. I'll walk you through appealing "
            "your traffic penalty one question at a time. Type 'restart' at any "
            "point to start over.\n\n" + self._prompt(session)
        )
        session.conversation_history.append({"role": "assistant", "content": greeting})
        self.sessions[session.session_id] = session
        logger.info("Started session %s", session.session_id)
        return session.session_id, greeting

    def get_session(self, session_id: str) -> SessionState:
        session = self.sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    async def process_message(self, session_id: str, user_message: str) -> dict:
        session = self.get_session(session_id)
        session.conversation_history.append({"role": "user", "content": user_message})

        if user_message.strip().lower() in RESET_TOKENS:
            session.reset()
            logger.info("Session %s reset", session_id)
            return self._reply(
                session, "No problem, let's start again.\n\n" + self._prompt(session)
            )

        if session.state == "complete":
            return self._reply(
                session,
                "Your appeal has already been submitted. Type 'reset' to start a new one.",
            )

        parser, on_success, _ = self.stages[session.state]
        text = self._apply_suggestion(session, user_message)
        try:
            value = parser(session, text)
        except ValidationError as e:
            logger.debug("Session %s stays in %s: %s", session_id, session.state, e.prompt)
            return self._reply(session, e.prompt)

        session.suggestions.pop(STAGE_FIELDS.get(session.state, ""), None)
        message = await on_success(session, value)
        return self._reply(session, message)

    def get_snapshot(self, session_id: str) -> dict:
        return self.get_session(session_id).case.to_dict()

    def add_evidence(self, session_id: str, reference: str) -> list[str]:
        session = self.get_session(session_id)
        if session.state == "complete":
            raise ValidationError("This appeal has already been submitted.")
        if not reference or not reference.strip():
            raise ValidationError("Evidence needs a name or reference.")
        session.case.add_evidence(reference.strip())
        logger.info("Session %s added evidence %r", session_id, reference.strip())
        return list(session.case.evidence)

    def get_prediction(self, session_id: str, as_of: date | None = None) -> dict:
        session = self.get_session(session_id)
        return predict_case(session.case, as_of=as_of).to_dict()

    async def propose_extraction(self, session_id: str, data: bytes, filename: str) -> dict:
        session = self.get_session(session_id)
        result = await self.extractor.extract(data, filename)
        session.pending_extraction = result
        found = ", ".join(f"{k}: {v}" for k, v in result.patch.items()) or "nothing readable"
        return {
            "message": (
                f"I read the following from {filename}: {found}. "
                "Shall I use these details?"
            ),
            "patch": dict(result.patch),
            "confidence": result.confidence,
        }

    def resolve_extraction(self, session_id: str, accept: bool) -> dict:
        session = self.get_session(session_id)
        pending = session.pending_extraction
        if pending is None:
            raise ValidationError("There are no extracted details waiting for a decision.")
        session.pending_extraction = None

        if not accept:
            return self._reply(
                session, "OK, I've discarded those details.\n\n" + self._prompt(session)
            )

        for key, value in pending.patch.items():
            if getattr(session.case, key, None) is None:
                session.suggestions[key] = value
        logger.info("Session %s accepted %d suggestions", session_id, len(session.suggestions))
        return self._reply(
            session, "Thanks, I'll offer those details as we go.\n\n" + self._prompt(session)
        )

    async def render_form(self, session_id: str, form: str) -> bytes:
        session = self.get_session(session_id)
        document = session.case.form_documents.get(form)
        if document is None:
            raise ValidationError(f"The {form.upper()} form hasn't been completed yet.")
        fields = dict(session.case.form_fields.get(form, {}))
        fields["document"] = document
        return await self.renderer.render(form, fields)

    # ------------------------------------------------------------------
    # Stage parsers
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_ticket_type(session: SessionState, text: str):
        return validators.parse_ticket_type(text)

    @staticmethod
    def _parse_ticket(session: SessionState, text: str) -> str:
        return validators.parse_ticket_number(text, TICKET_TYPES[session.case.ticket_type])

    @staticmethod
    def _parse_description(session: SessionState, text: str) -> str | None:
        if validators.is_generate_request(text):
            return None
        return validators.parse_description(text)

    def _parse_form_field(self, session: SessionState, text: str) -> tuple[str, str, Any]:
        form_id = self._current_form(session)
        form_field = self._next_form_field(session, form_id)
        return form_id, form_field.key, validators.FORM_FIELD_PARSERS[form_field.key](text)

    @staticmethod
    def _parse_evidence(session: SessionState, text: str) -> str:
        token = text.strip().lower()
        if token in FINALIZE_TOKENS:
            return token
        raise ValidationError(
            "Upload any evidence you have (photos, receipts, letters) and I'll add it "
            "to your case. When you're ready, type 'submit' to send your appeal, "
            "or 'skip' to send it without more evidence."
        )

    # ------------------------------------------------------------------
    # Stage handlers
    # ------------------------------------------------------------------

    async def _on_ticket_type(self, session: SessionState, ticket_type) -> str:
        session.case.write("ticket_type", ticket_type.id)
        session.case.write("category", ticket_type.category)
        session.state = "ticket"
        return (
            f"{ticket_type.name} selected.\n"
            f"Category: {ticket_type.category} penalty, handled by {ticket_type.authority}.\n\n"
            + self._prompt(session)
        )

    async def _on_ticket(self, session: SessionState, ticket_number: str) -> str:
        ticket_type = TICKET_TYPES[session.case.ticket_type]
        session.case.write("ticket_number", ticket_number)
        session.state = "vehicle_registration"
        guidance = get_appeal_guidance(ticket_type)
        low, high = ticket_type.fine_range
        return (
            f"Ticket number confirmed: {ticket_number}\n"
            f"Appeal route: {guidance['appeal_route']}\n"
            f"Time limit: {guidance['time_limit']}\n"
            f"Typical range: £{low}-£{high}\n\n" + self._prompt(session)
        )

    async def _on_registration(self, session: SessionState, registration: str) -> str:
        session.case.write("vehicle_registration", registration)
        session.state = "amount"
        return f"Vehicle registration {registration} recorded.\n\n" + self._prompt(session)

    async def _on_amount(self, session: SessionState, amount: float) -> str:
        session.case.write("fine_amount", amount)
        session.state = "issue_date"
        return (
            f"Fine amount: £{amount:.2f}. A successful appeal means you pay nothing.\n\n"
            + self._prompt(session)
        )

    async def _on_issue_date(self, session: SessionState, issue_date: str) -> str:
        session.case.write("issue_date", issue_date)
        session.state = "due_date"
        return f"Issue date recorded as {issue_date}.\n\n" + self._prompt(session)

    async def _on_due_date(self, session: SessionState, due_date: str) -> str:
        session.case.write("due_date", due_date)
        session.state = "location"
        return f"Due date recorded as {due_date}.\n\n" + self._prompt(session)

    async def _on_location(self, session: SessionState, location: str) -> str:
        session.case.write("location", location)
        session.state = "reason"
        return f"Location recorded: {location}\n\n" + self._prompt(session)

    async def _on_reason(self, session: SessionState, reason: str) -> str:
        session.case.write("reason", reason)
        prediction = predict_case(session.case)
        session.preview = prediction.to_dict()
        session.state = "description"

        lines = [
            f"Appeal reason: {reason}",
            f"Early estimate: {prediction.success_probability:.0%} chance of success "
            f"({prediction.confidence:.0%} confidence).",
        ]
        if prediction.recommended_grounds:
            lines.append("Strongest grounds so far:")
            lines.extend(f"• {g.title}" for g in prediction.recommended_grounds)
        return "\n".join(lines) + "\n\n" + self._prompt(session)

    async def _on_description(self, session: SessionState, description: str | None) -> str:
        if description is None:
            letter = predict_case(session.case).letter
            description = letter.body
            session.letter = letter.render()
            intro = "I've drafted your appeal:\n\n" + description
        else:
            intro = "Your description has been recorded."
        session.case.write("description", description)

        if session.case.category == "TEC":
            session.state = "form_selection"
        else:
            session.state = "evidence"
        return intro + "\n\n" + self._prompt(session)

    async def _on_form_selection(self, session: SessionState, choice: str) -> str:
        if choice == "help":
            return (
                "TE9 is a witness statement: use it if you never received the "
                "notice, your representations or appeal went unanswered, or you "
                "already paid.\nTE7 asks the court for more time when the TE9 "
                "deadline has passed. Most late filers need both.\n\n"
                + self._prompt(session)
            )
        if choice == "skip":
            session.state = "evidence"
            return "No court forms then.\n\n" + self._prompt(session)

        forms = ["te7", "te9"] if choice == "both" else [choice]
        session.case.select_forms(forms)
        self._enter_form(session, forms[0])
        return self._prompt(session)

    async def _on_form_field(self, session: SessionState, value: tuple[str, str, Any]) -> str:
        form_id, key, parsed = value
        session.case.write_form_field(form_id, key, parsed)
        if self._next_form_field(session, form_id) is not None:
            return self._prompt(session)

        form = COURT_FORMS[form_id]
        document = render_form(form, session.case.form_fields[form_id], session.case)
        session.case.form_documents[form_id] = document
        logger.info("Session %s completed %s", session.session_id, form_id)

        outstanding = [f for f in session.case.selected_forms if f not in session.case.form_documents]
        if outstanding:
            self._enter_form(session, outstanding[0])
        else:
            session.state = "evidence"
        return f"Your {form.display_name} is ready:\n\n{document}\n\n" + self._prompt(session)

    async def _on_evidence(self, session: SessionState, token: str) -> str:
        payload = session.case.to_dict()
        payload["letter"] = session.letter
        try:
            session.submission = await self.submitter.submit(session.session_id, payload)
        except ExternalCollaboratorFailure as e:
            logger.warning("Session %s submission failed: %s", session.session_id, e)
            return (
                "I couldn't submit your appeal just now. Your details are saved, "
                "so type 'submit' to try again."
            )
        session.state = "complete"
        return (
            "Your appeal has been submitted. Keep copies of everything and watch "
            "for a response from the authority. Type 'reset' to start another appeal."
        )

    # ------------------------------------------------------------------
    # Form sub-flow
    # ------------------------------------------------------------------

    @staticmethod
    def _enter_form(session: SessionState, form_id: str) -> None:
        if session.case.category != "TEC" or form_id not in session.case.selected_forms:
            raise DataIntegrityViolation(
                f"Cannot enter the {form_id} form for a {session.case.category} ticket "
                f"with forms {session.case.selected_forms}"
            )
        session.state = FORM_STAGES[form_id]

    @staticmethod
    def _current_form(session: SessionState) -> str:
        form_id = session.state.removesuffix("_form")
        if session.case.category != "TEC" or form_id not in session.case.selected_forms:
            raise DataIntegrityViolation(
                f"In {session.state} without {form_id} selected for a TEC ticket"
            )
        return form_id

    @staticmethod
    def _ticket_prompt(session: SessionState) -> str:
        ticket_type = TICKET_TYPES[session.case.ticket_type]
        return (
            f"Please enter your {ticket_type.name} number "
            f"(e.g. {ticket_type.examples[0]})."
        )

    def _form_prompt(self, session: SessionState) -> str:
        form_id = session.state.removesuffix("_form")
        form_field = self._next_form_field(session, form_id)
        return f"{COURT_FORMS[form_id].display_name}\n{form_field.prompt}"

    @staticmethod
    def _next_form_field(session: SessionState, form_id: str):
        filled = session.case.form_fields.get(form_id, {})
        for form_field in COURT_FORMS[form_id].fields:
            if form_field.key not in filled:
                return form_field
        return None

    # ------------------------------------------------------------------
    # Prompts and helpers
    # ------------------------------------------------------------------

    def _prompt(self, session: SessionState) -> str:
        stage = self.stages.get(session.state)
        prompt = stage[2](session) if stage else "Type 'reset' to start a new appeal."

        suggestion = self._suggestion_for(session)
        if suggestion is not None:
            prompt += f"\nFrom your upload I read: {suggestion}. Reply 'yes' to use it."
        return prompt

    @staticmethod
    def _suggestion_for(session: SessionState) -> str | None:
        key = STAGE_FIELDS.get(session.state)
        if key is None or key not in session.suggestions:
            return None
        value = session.suggestions[key]
        if key in ("issue_date", "due_date"):
            try:
                return date.fromisoformat(str(value)).strftime("%d/%m/%Y")
            except ValueError:
                return str(value)
        return str(value)

    def _apply_suggestion(self, session: SessionState, text: str) -> str:
        if text.strip().lower() != "yes":
            return text
        suggestion = self._suggestion_for(session)
        return text if suggestion is None else suggestion

    @staticmethod
    def _reply(session: SessionState, message: str) -> dict:
        session.conversation_history.append({"role": "assistant", "content": message})
        return {
            "message": message,
            "state": session.state,
            "ticket_type": session.case.ticket_type,
            "complete": session.state == "complete",
            "preview": session.preview,
        }


engine = IntakeEngine()
