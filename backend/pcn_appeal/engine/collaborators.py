"""Adapters for the services the intake engine hands work to.

Submission, document rendering and OCR extraction sit behind small base
classes so the engine can be driven with fakes in tests. Every adapter turns
its own failures into ExternalCollaboratorFailure.
"""

from __future__ import annotations

import asyncio
import json
import logging
import mimetypes
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

import requests

from ..config import settings
from ..errors import ExternalCollaboratorFailure
from .llm import chat_json, image_message

logger = logging.getLogger(__name__)

EXTRACTABLE_FIELDS = (
    "ticket_number",
    "vehicle_registration",
    "fine_amount",
    "issue_date",
    "due_date",
    "location",
)


# ------------------------------------------------------------------
# Submission
# ------------------------------------------------------------------


class BaseSubmitter:
    name = "submission"

    async def submit(self, case_id: str, payload: dict) -> dict:
        raise NotImplementedError


class HttpSubmitter(BaseSubmitter):
    def __init__(self, url: str, timeout: float | None = None) -> None:
        self.url = url
        self.timeout = timeout or settings.collaborator_timeout

    def _post(self, case_id: str, payload: dict) -> dict:
        response = requests.post(
            self.url,
            json={"case_id": case_id, "case": payload},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json() if response.content else {}

    async def submit(self, case_id: str, payload: dict) -> dict:
        try:
            result = await asyncio.to_thread(self._post, case_id, payload)
        except (requests.RequestException, ValueError) as e:
            logger.error("Submission of case %s failed: %s", case_id, e)
            raise ExternalCollaboratorFailure(self.name, str(e)) from e
        logger.info("Submitted case %s to %s", case_id, self.url)
        return result


class FileArchiveSubmitter(BaseSubmitter):
    """Writes each submitted case to a JSON file, for running without an endpoint."""

    def __init__(self, directory: str | Path | None = None) -> None:
        self.directory = Path(directory or settings.submission_dir)

    def _write(self, case_id: str, payload: dict) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / f"{case_id}.json"
        document = {
            "case_id": case_id,
            "submitted_at": datetime.now(timezone.utc).isoformat(),
            "case": payload,
        }
        path.write_text(json.dumps(document, indent=2, default=str), encoding="utf-8")
        return path

    async def submit(self, case_id: str, payload: dict) -> dict:
        try:
            path = await asyncio.to_thread(self._write, case_id, payload)
        except OSError as e:
            logger.error("Archiving case %s failed: %s", case_id, e)
            raise ExternalCollaboratorFailure(self.name, str(e)) from e
        logger.info("Archived case %s at %s", case_id, path)
        return {"reference": case_id, "path": str(path)}


def default_submitter() -> BaseSubmitter:
    if settings.submission_url:
        return HttpSubmitter(settings.submission_url)
    return FileArchiveSubmitter()


# ------------------------------------------------------------------
# Document rendering
# ------------------------------------------------------------------


class BaseRenderer:
    name = "renderer"

    async def render(self, form: str, fields: dict) -> bytes:
        raise NotImplementedError


class HttpDocumentRenderer(BaseRenderer):
    def __init__(self, url: str | None = None, timeout: float | None = None) -> None:
        self.url = url if url is not None else settings.renderer_url
        self.timeout = timeout or settings.collaborator_timeout

    def _post(self, form: str, fields: dict) -> bytes:
        response = requests.post(
            self.url,
            json={"form": form, "fields": fields},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.content

    async def render(self, form: str, fields: dict) -> bytes:
        if not self.url:
            raise ExternalCollaboratorFailure(self.name, "no renderer URL configured")
        try:
            return await asyncio.to_thread(self._post, form, fields)
        except requests.RequestException as e:
            logger.error("Rendering %s failed: %s", form, e)
            raise ExternalCollaboratorFailure(self.name, str(e)) from e


# ------------------------------------------------------------------
# OCR extraction
# ------------------------------------------------------------------


@dataclass
class ExtractionResult:
    patch: dict = field(default_factory=dict)
    confidence: float = 0.0
    raw_text: str = ""


class BaseExtractor:
    name = "extraction"

    async def extract(self, data: bytes, filename: str) -> ExtractionResult:
        raise NotImplementedError


EXTRACTION_PROMPT = (
    "You read photographs and scans of UK traffic penalty notices and pull out "
    "the details needed to appeal them. Always answer with valid JSON."
)

EXTRACTION_INSTRUCTIONS = (
    "Read the penalty notice in the image and return ONLY a JSON object with "
    "exactly these keys:\n"
    "{\n"
    '  "ticket_number": string|null,\n'
    '  "vehicle_registration": string|null,\n'
    '  "fine_amount": number|null,\n'
    '  "issue_date": "DD/MM/YYYY"|null,\n'
    '  "due_date": "DD/MM/YYYY"|null,\n'
    '  "location": string|null,\n'
    '  "confidence": number between 0 and 1,\n'
    '  "raw_text": string\n'
    "}\n"
    "Use null for anything you cannot read clearly. Do not guess."
)


class OpenAIExtractor(BaseExtractor):
    async def extract(self, data: bytes, filename: str) -> ExtractionResult:
        if not settings.openai_api_key:
            raise ExternalCollaboratorFailure(self.name, "no OpenAI API key configured")
        content_type = mimetypes.guess_type(filename)[0] or "image/jpeg"
        try:
            result = await chat_json(
                EXTRACTION_PROMPT,
                [image_message(EXTRACTION_INSTRUCTIONS, data, content_type)],
            )
        except Exception as e:
            logger.error("Extraction from %s failed: %s", filename, e)
            raise ExternalCollaboratorFailure(self.name, str(e)) from e

        patch = {
            key: result[key]
            for key in EXTRACTABLE_FIELDS
            if result.get(key) not in (None, "")
        }
        try:
            confidence = float(result.get("confidence") or 0.0)
        except (TypeError, ValueError):
            confidence = 0.0
        logger.info("Extracted %d fields from %s", len(patch), filename)
        return ExtractionResult(
            patch=patch,
            confidence=min(1.0, max(0.0, confidence)),
            raw_text=str(result.get("raw_text") or ""),
        )
