from fastapi import APIRouter, File, Form, HTTPException, Response, UploadFile

from ..engine.intake_engine import engine
from ..schemas import (
    ChatMessageRequest,
    ChatMessageResponse,
    EvidenceRequest,
    EvidenceResponse,
    ExtractionResponse,
    FormRenderRequest,
    PredictionResponse,
    ResolveExtractionRequest,
    SnapshotResponse,
    StartSessionResponse,
)

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.post("/start", response_model=StartSessionResponse)
async def start_session():
    session_id, greeting = engine.start_session()
    return StartSessionResponse(
        session_id=session_id,
        message=greeting,
        state=engine.sessions[session_id].state,
    )


@router.post("/message", response_model=ChatMessageResponse)
async def send_message(req: ChatMessageRequest):
    result = await engine.process_message(req.session_id, req.message)
    return ChatMessageResponse(**result)


@router.get("/{session_id}/snapshot", response_model=SnapshotResponse)
async def get_snapshot(session_id: str):
    case = engine.get_snapshot(session_id)
    return SnapshotResponse(
        session_id=session_id,
        state=engine.sessions[session_id].state,
        case=case,
    )


@router.get("/{session_id}/prediction", response_model=PredictionResponse)
async def get_prediction(session_id: str):
    return engine.get_prediction(session_id)


@router.post("/evidence", response_model=EvidenceResponse)
async def add_evidence(req: EvidenceRequest):
    evidence = engine.add_evidence(req.session_id, req.reference)
    return EvidenceResponse(session_id=req.session_id, evidence=evidence)


@router.post("/extract", response_model=ExtractionResponse)
async def extract(session_id: str = Form(...), file: UploadFile = File(...)):
    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    result = await engine.propose_extraction(session_id, data, file.filename or "upload")
    return ExtractionResponse(**result)


@router.post("/extract/resolve", response_model=ChatMessageResponse)
async def resolve_extraction(req: ResolveExtractionRequest):
    result = engine.resolve_extraction(req.session_id, req.accept)
    return ChatMessageResponse(**result)


@router.post("/forms/{form}/render")
async def render_form(form: str, req: FormRenderRequest):
    if form not in ("te7", "te9"):
        raise HTTPException(status_code=404, detail=f"Unknown form {form!r}")
    document = await engine.render_form(req.session_id, form)
    return Response(
        content=document,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{form.upper()}.pdf"'},
    )
