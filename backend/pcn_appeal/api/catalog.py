from typing import Optional

from fastapi import APIRouter, HTTPException

from ..engine.scoring import AppealInput, predict
from ..knowledge import (
    APPEAL_GROUNDS,
    TICKET_TYPES,
    get_ground,
    grounds_by_category,
    search_grounds,
    strongest_grounds,
)
from ..knowledge.base import GroundDefinition, TicketType
from ..knowledge.ticket_types import get_ticket_type
from ..schemas import GroundSummary, PredictionResponse, PredictRequest, TicketTypeSummary

router = APIRouter(prefix="/api", tags=["catalog"])


def _summary(ground: GroundDefinition) -> GroundSummary:
    return GroundSummary(
        id=ground.id,
        section=ground.section,
        title=ground.title,
        description=ground.description,
        category=ground.category,
        legal_strength=ground.legal_strength,
        evidence_required=list(ground.evidence_required),
        common_scenarios=list(ground.common_scenarios),
        success_rate=ground.success_rate,
    )


@router.get("/grounds", response_model=list[GroundSummary])
async def list_grounds(
    q: Optional[str] = None,
    category: Optional[str] = None,
    strongest: bool = False,
):
    if q:
        grounds = search_grounds(q)
    elif category:
        grounds = grounds_by_category(category)
    elif strongest:
        grounds = strongest_grounds()
    else:
        grounds = list(APPEAL_GROUNDS)
    return [_summary(g) for g in grounds]


@router.get("/grounds/{ground_id}", response_model=GroundSummary)
async def ground_detail(ground_id: str):
    ground = get_ground(ground_id.upper())
    if ground is None:
        raise HTTPException(status_code=404, detail=f"Unknown ground {ground_id!r}")
    return _summary(ground)


def _ticket_summary(t: TicketType) -> TicketTypeSummary:
    return TicketTypeSummary(
        id=t.id,
        name=t.name,
        category=t.category,
        appeal_route=t.appeal_route,
        authority=t.authority,
        time_limit=t.time_limit,
        examples=list(t.examples),
    )


@router.get("/ticket-types", response_model=list[TicketTypeSummary])
async def list_ticket_types():
    return [_ticket_summary(t) for t in TICKET_TYPES.values()]


@router.get("/ticket-types/{type_id}", response_model=TicketTypeSummary)
async def ticket_type_detail(type_id: str):
    ticket_type = get_ticket_type(type_id.lower())
    if ticket_type is None:
        raise HTTPException(status_code=404, detail=f"Unknown ticket type {type_id!r}")
    return _ticket_summary(ticket_type)


@router.post("/predict", response_model=PredictionResponse)
async def predict_appeal(req: PredictRequest):
    appeal = AppealInput(
        description=req.description,
        circumstances=req.circumstances,
        location=req.location,
        incident_date=req.incident_date,
        evidence=req.evidence,
        previous_attempts=req.previous_attempts,
        pcn_amount=req.pcn_amount,
        council_name=req.council_name,
    )
    return predict(appeal, as_of=req.as_of).to_dict()
