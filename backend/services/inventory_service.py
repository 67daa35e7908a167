"""
Servicio de inventario - Consultas de lotes disponibles por proyecto
"""
import logging
import re
from typing import Any, Dict, List, Optional, Type
from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlmodel import Session, select
from models.property import PROJECT_MODELS, ProjectProperty, PropertyStatus

logger = logging.getLogger(__name__)


class UnknownProjectError(ValueError):
    """Raised when a project name has no inventory table"""


class PropertyNotFoundError(LookupError):
    """Raised when no lot matches (Block, Lot) in the project table"""


class PropertyStateError(ValueError):
    """Raised when a lot is not in the status an operation requires"""


def resolve_project(project: str) -> Type[ProjectProperty]:
    """Devolver el modelo de la tabla del proyecto"""
    model = PROJECT_MODELS.get(project)
    if model is None:
        raise UnknownProjectError(f"Unknown project: {project}")
    return model


def _numeric_part(value: Any) -> int:
    digits = re.sub(r"\D", "", str(value or ""))
    return int(digits) if digits else 0


def block_lot_key(record: Dict[str, Any]):
    """Orden natural por Block y luego Lot ("2" antes que "10")"""
    return _numeric_part(record.get("Block")), _numeric_part(record.get("Lot"))


def fetch_available(engine: Engine, project: str) -> List[Dict[str, Any]]:
    """Lotes con Status 'available' (sin importar mayúsculas) de un proyecto"""
    model = resolve_project(project)
    with Session(engine) as session:
        statement = select(model).where(
            func.lower(model.attribute("Status")) == PropertyStatus.available.value.lower()
        )
        rows = session.exec(statement).all()
        records = [row.to_record() for row in rows]
    return sorted(records, key=block_lot_key)


def fetch_all_available(engine: Engine) -> List[Dict[str, Any]]:
    """
    Lotes disponibles de todos los proyectos en una sola lista.

    Cada proyecto se consulta por separado; si uno falla se registra el
    error y aporta una lista vacía, el otro proyecto se sigue mostrando.
    """
    merged = []
    for project in PROJECT_MODELS:
        try:
            merged.extend(fetch_available(engine, project))
        except Exception as e:
            logger.error(f"Error fetching available inventory for {project}: {e}")
    return merged


def get_property(engine: Engine, project: str, block: str, lot: str) -> Optional[Dict[str, Any]]:
    """Obtener un lote por su llave (Block, Lot)"""
    model = resolve_project(project)
    with Session(engine) as session:
        statement = select(model).where(
            model.attribute("Block") == block,
            model.attribute("Lot") == lot
        )
        row = session.exec(statement).first()
        return row.to_record() if row else None


def count_by_project(records: List[Dict[str, Any]]) -> Dict[str, int]:
    """Resumen de lotes por proyecto"""
    summary = {project: 0 for project in PROJECT_MODELS}
    for record in records:
        summary[record["Project"]] = summary.get(record["Project"], 0) + 1
    return summary
