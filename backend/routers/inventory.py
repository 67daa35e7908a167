"""
Router de Inventario - Lotes disponibles por proyecto
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.engine import Engine
from config.db_connection import get_engine
from services.inventory_service import (
    UnknownProjectError, fetch_available, fetch_all_available, get_property, count_by_project
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["inventory"])


@router.get("/inventory/available")
async def get_available_inventory(project: Optional[str] = None, engine: Engine = Depends(get_engine)):
    """Obtener lotes disponibles de uno o de todos los proyectos"""
    try:
        if project:
            properties = fetch_available(engine, project)
        else:
            properties = fetch_all_available(engine)
    except UnknownProjectError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error loading available inventory: {e}")
        raise HTTPException(status_code=500, detail="Error loading available inventory")

    return {
        "status": "success",
        "data": {
            "properties": properties,
            "summary": {
                "total": len(properties),
                "by_project": count_by_project(properties)
            }
        }
    }


@router.get("/inventory/{project}/{block}/{lot}")
async def get_inventory_property(project: str, block: str, lot: str, engine: Engine = Depends(get_engine)):
    """Obtener un lote por proyecto, Block y Lot"""
    try:
        record = get_property(engine, project, block, lot)
    except UnknownProjectError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if record is None:
        raise HTTPException(status_code=404, detail="Property not found")

    return {"status": "success", "data": record}
