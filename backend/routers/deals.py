"""
Router de Cierre de Trato - Endpoints del wizard paso a paso
"""
import logging
from typing import Any
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.engine import Engine
from config.db_connection import get_engine
from models.property import PropertyStatus
from services.deal_session_store import DealSession, DealSessionStore, deal_sessions
from services.inventory_service import UnknownProjectError, get_property
from services.reservation_service import ReservationCommitter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/deals", tags=["deals"])


class SelectPropertyRequest(BaseModel):
    """Lote elegido en el paso de inventario"""
    project: str
    block: str
    lot: str


class EditFieldRequest(BaseModel):
    """Cambio de un campo del lote seleccionado"""
    field: str
    value: Any = None


class JumpRequest(BaseModel):
    index: int


def get_deal_sessions() -> DealSessionStore:
    return deal_sessions


def get_deal_session(token: str, store: DealSessionStore) -> DealSession:
    session = store.get(token)
    if session is None:
        raise HTTPException(status_code=404, detail="Deal session not found or expired")
    return session


def wizard_response(session: DealSession, ok: bool):
    return {
        "status": "success" if ok else "error",
        "message": session.wizard.message,
        "data": session.to_dict()
    }


@router.post("")
async def create_deal_session(store: DealSessionStore = Depends(get_deal_sessions)):
    """Iniciar un cierre de trato en el paso de inventario"""
    session = store.create()
    return {"status": "success", "data": session.to_dict()}


@router.post("/cleanup")
async def cleanup_deal_sessions(store: DealSessionStore = Depends(get_deal_sessions)):
    """Clean up expired deal sessions"""
    removed = store.cleanup()
    return {"success": True, "message": f"Cleaned up {removed} expired deal sessions"}


@router.get("/{token}")
async def get_deal_state(token: str, store: DealSessionStore = Depends(get_deal_sessions)):
    session = get_deal_session(token, store)
    return {"status": "success", "data": session.to_dict()}


@router.delete("/{token}")
async def discard_deal_session(token: str, store: DealSessionStore = Depends(get_deal_sessions)):
    """Descartar el progreso del wizard (no se guarda nada en la base de datos)"""
    if not store.discard(token):
        raise HTTPException(status_code=404, detail="Deal session not found")
    return {"success": True, "message": "Deal session discarded"}


@router.post("/{token}/select")
async def select_deal_property(
    token: str,
    request: SelectPropertyRequest,
    store: DealSessionStore = Depends(get_deal_sessions),
    engine: Engine = Depends(get_engine)
):
    """Seleccionar un lote disponible para el trato"""
    session = get_deal_session(token, store)

    try:
        record = get_property(engine, request.project, request.block, request.lot)
    except UnknownProjectError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error loading {request.project} block {request.block} lot {request.lot}: {e}")
        raise HTTPException(status_code=500, detail="Error loading property")

    if record is None:
        raise HTTPException(status_code=404, detail="Property not found")
    if not PropertyStatus.available.matches(record.get("Status")):
        raise HTTPException(status_code=409, detail="Property is not available")

    ok = session.wizard.select_property(record)
    return wizard_response(session, ok)


@router.post("/{token}/fields")
async def edit_deal_field(token: str, request: EditFieldRequest, store: DealSessionStore = Depends(get_deal_sessions)):
    """Editar un campo del lote seleccionado (se guarda al confirmar)"""
    session = get_deal_session(token, store)
    ok = session.wizard.edit_field(request.field, request.value)
    return wizard_response(session, ok)


@router.post("/{token}/advance")
async def advance_deal(
    token: str,
    store: DealSessionStore = Depends(get_deal_sessions),
    engine: Engine = Depends(get_engine)
):
    """Avanzar un paso; en Account Creation se confirma la reserva del lote"""
    session = get_deal_session(token, store)
    ok = session.wizard.advance(ReservationCommitter(engine))
    return wizard_response(session, ok)


@router.post("/{token}/retreat")
async def retreat_deal(token: str, store: DealSessionStore = Depends(get_deal_sessions)):
    session = get_deal_session(token, store)
    ok = session.wizard.retreat()
    return wizard_response(session, ok)


@router.post("/{token}/jump")
async def jump_deal_step(token: str, request: JumpRequest, store: DealSessionStore = Depends(get_deal_sessions)):
    """Volver a un paso anterior desde el indicador de pasos"""
    session = get_deal_session(token, store)
    moved = session.wizard.jump_to(request.index)
    return {"status": "success", "moved": moved, "message": session.wizard.message, "data": session.to_dict()}
