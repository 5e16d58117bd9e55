from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class StartSessionResponse(BaseModel):
    session_id: str
    message: str
    state: str


class ChatMessageRequest(BaseModel):
    session_id: str
    message: str


class ChatMessageResponse(BaseModel):
    message: str
    state: str
    ticket_type: Optional[str] = None
    complete: bool = False
    preview: Optional[dict] = None


class SnapshotResponse(BaseModel):
    session_id: str
    state: str
    case: dict


class EvidenceRequest(BaseModel):
    session_id: str
    reference: str = Field(min_length=1)


class EvidenceResponse(BaseModel):
    session_id: str
    evidence: list[str]


class ExtractionResponse(BaseModel):
    message: str
    patch: dict
    confidence: float


class ResolveExtractionRequest(BaseModel):
    session_id: str
    accept: bool


class FormRenderRequest(BaseModel):
    session_id: str


class GroundSummary(BaseModel):
    id: str
    section: str
    title: str
    description: str
    category: str
    legal_strength: str
    evidence_required: list[str]
    common_scenarios: list[str]
    success_rate: Optional[int] = None


class TicketTypeSummary(BaseModel):
    id: str
    name: str
    category: str
    appeal_route: str
    authority: str
    time_limit: str
    examples: list[str]


class PredictRequest(BaseModel):
    description: str
    circumstances: list[str] = Field(default_factory=list)
    location: str = ""
    incident_date: date
    evidence: list[str] = Field(default_factory=list)
    previous_attempts: int = Field(default=0, ge=0)
    pcn_amount: Optional[float] = None
    council_name: Optional[str] = None
    as_of: Optional[date] = None


class PredictionResponse(BaseModel):
    success_probability: float
    confidence: float
    matched_grounds: list[dict]
    recommended_grounds: list[dict]
    key_factors: list[str]
    evidence_gaps: list[str]
    risk_factors: list[str]
    legal_strategy: str
    priority_actions: list[str]
    appeal_letter: str
    components: dict[str, float]
    weights_version: int
