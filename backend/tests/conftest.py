from datetime import date

import pytest

from pcn_appeal.engine.collaborators import (
    BaseExtractor,
    BaseRenderer,
    BaseSubmitter,
    ExtractionResult,
)
from pcn_appeal.engine.intake_engine import IntakeEngine
from pcn_appeal.errors import ExternalCollaboratorFailure

AS_OF = date(2024, 6, 1)


class RecordingSubmitter(BaseSubmitter):
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[tuple[str, dict]] = []

    async def submit(self, case_id: str, payload: dict) -> dict:
        if self.fail:
            raise ExternalCollaboratorFailure(self.name, "endpoint unavailable")
        self.calls.append((case_id, payload))
        return {"reference": case_id}


class StaticRenderer(BaseRenderer):
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict]] = []

    async def render(self, form: str, fields: dict) -> bytes:
        self.calls.append((form, fields))
        return b"%PDF-1.4 test"


class StaticExtractor(BaseExtractor):
    def __init__(self, patch: dict | None = None, fail: bool = False) -> None:
        self.patch = patch or {}
        self.fail = fail

    async def extract(self, data: bytes, filename: str) -> ExtractionResult:
        if self.fail:
            raise ExternalCollaboratorFailure(self.name, "model unavailable")
        return ExtractionResult(patch=dict(self.patch), confidence=0.9)


@pytest.fixture
def submitter():
    return RecordingSubmitter()


@pytest.fixture
def renderer():
    return StaticRenderer()


@pytest.fixture
def intake(submitter, renderer):
    return IntakeEngine(
        submitter=submitter,
        renderer=renderer,
        extractor=StaticExtractor(
            {"ticket_number": "PCN12345678", "issue_date": "2024-03-05"}
        ),
    )


@pytest.fixture
def failing_intake(renderer):
    return IntakeEngine(
        submitter=RecordingSubmitter(fail=True),
        renderer=renderer,
        extractor=StaticExtractor(fail=True),
    )


@pytest.fixture
def as_of():
    return AS_OF
