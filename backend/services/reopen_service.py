"""
Servicio de reapertura - Devuelve un lote vendido al inventario disponible
"""
import logging
from typing import Any, Dict, List, Optional
from pydantic import BaseModel
from sqlalchemy import delete, update
from sqlalchemy.engine import Engine
from sqlmodel import Session
from models.balance import Balance
from models.client import Client
from models.document import Document
from models.property import PropertyStatus
from services.inventory_service import (
    PropertyNotFoundError, PropertyStateError, resolve_project, get_property
)

logger = logging.getLogger(__name__)

# Tables holding buyer records linked by the Name column, purged in this order
BUYER_TABLES = (Client, Document, Balance)


class ReopenError(Exception):
    """The lot itself could not be reset to Available"""


class ReopenResult(BaseModel):
    """Resultado de la reapertura de un lote"""
    project: str
    block: str
    lot: str
    buyer_name: Optional[str] = None
    deleted: Dict[str, int] = {}
    cleanup_failures: List[str] = []
    property: Dict[str, Any] = {}


def delete_buyer_rows(engine: Engine, model, buyer_name: str) -> int:
    """Eliminar las filas de una tabla asociadas al nombre del comprador"""
    with Session(engine) as session:
        result = session.execute(
            delete(model).where(model.name == buyer_name).execution_options(synchronize_session=False)
        )
        session.commit()
        return result.rowcount


def reopen_property(engine: Engine, project: str, block: str, lot: str) -> ReopenResult:
    """
    Reabrir un lote vendido.

    Los registros del comprador (Clients, Documents, Balance) se eliminan
    uno por uno y un fallo solo queda registrado en cleanup_failures. El
    cambio del lote a Available con los datos del comprador en blanco es
    obligatorio: si falla se lanza ReopenError.
    """
    model = resolve_project(project)
    record = get_property(engine, project, block, lot)
    if record is None:
        raise PropertyNotFoundError(f"{project} block {block} lot {lot} not found")
    if not PropertyStatus.sold.matches(record.get("Status")):
        raise PropertyStateError(
            f"Only sold properties can be reopened (current status: {record.get('Status')})"
        )

    # Name rows are matched on the stored value, whitespace included
    buyer_name = record.get(model.BUYER_FIELD)
    if not (buyer_name or "").strip():
        buyer_name = None
    result = ReopenResult(project=project, block=block, lot=lot, buyer_name=buyer_name)

    if buyer_name:
        for buyer_table in BUYER_TABLES:
            table_name = buyer_table.__tablename__
            try:
                result.deleted[table_name] = delete_buyer_rows(engine, buyer_table, buyer_name)
            except Exception as e:
                logger.warning(f"Could not delete {table_name} rows for '{buyer_name}': {e}")
                result.cleanup_failures.append(table_name)
    else:
        logger.warning(f"{project} block {block} lot {lot} has no {model.BUYER_FIELD}; skipping buyer cleanup")

    values = {model.attribute("Status"): PropertyStatus.available.value}
    for column in model.CLEARED_ON_REOPEN:
        values[model.attribute(column)] = None

    try:
        with Session(engine) as session:
            update_result = session.execute(
                update(model).where(
                    model.attribute("Block") == block,
                    model.attribute("Lot") == lot
                ).values(values).execution_options(synchronize_session=False)
            )
            if update_result.rowcount == 0:
                session.rollback()
                raise ReopenError(f"{project} block {block} lot {lot} was not updated")
            session.commit()
    except ReopenError:
        raise
    except Exception as e:
        logger.error(f"Error resetting {project} block {block} lot {lot}: {e}")
        raise ReopenError(f"Failed to reopen {project} block {block} lot {lot}") from e

    logger.info(f"Reopened {project} block {block} lot {lot}")
    result.property = get_property(engine, project, block, lot) or {}
    return result
