"""
Router de Propiedades - Cambios de estado fuera del wizard (vendido, reapertura)
"""
import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.engine import Engine
from config.db_connection import get_engine
from services.inventory_service import UnknownProjectError, PropertyNotFoundError, PropertyStateError
from services.reopen_service import ReopenError, reopen_property
from services.reservation_service import mark_sold

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["properties"])


@router.post("/properties/{project}/{block}/{lot}/mark-sold")
async def mark_property_sold(project: str, block: str, lot: str, engine: Engine = Depends(get_engine)):
    """Marcar un lote reservado como vendido"""
    try:
        record = mark_sold(engine, project, block, lot)
    except UnknownProjectError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PropertyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PropertyStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Error marking {project} block {block} lot {lot} as sold: {e}")
        raise HTTPException(status_code=500, detail="Failed to save changes")

    return {
        "status": "success",
        "message": f"Block {block} Lot {lot} marked as sold",
        "data": record
    }


@router.post("/properties/{project}/{block}/{lot}/reopen")
async def reopen_sold_property(project: str, block: str, lot: str, engine: Engine = Depends(get_engine)):
    """Reabrir un lote vendido y eliminar los registros del comprador"""
    try:
        result = reopen_property(engine, project, block, lot)
    except UnknownProjectError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PropertyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PropertyStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ReopenError as e:
        raise HTTPException(status_code=500, detail=str(e))

    message = f"Block {block} Lot {lot} is available again"
    if result.cleanup_failures:
        message += f"; could not remove buyer records from: {', '.join(result.cleanup_failures)}"

    return {
        "status": "success",
        "message": message,
        "data": result.model_dump()
    }
