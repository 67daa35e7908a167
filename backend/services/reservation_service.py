"""
Servicio de reservas - Confirma la reserva del lote al cerrar el trato
"""
import logging
from typing import Any, Dict, Optional
from sqlalchemy import func, update
from sqlalchemy.engine import Engine
from sqlmodel import Session
from config.app_config import RESERVATION_GUARD
from models.property import PropertyStatus
from services.inventory_service import (
    PropertyNotFoundError, PropertyStateError, resolve_project, get_property
)

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "Failed to save changes. Please try again."
CONFLICT_MESSAGE = "This property is no longer available. Please select another one."


class ReservationError(Exception):
    """Commit of a reservation failed; message is safe to show to the operator"""

    def __init__(self, message: str = SAVE_FAILED_MESSAGE):
        super().__init__(message)
        self.message = message


class ReservationConflictError(ReservationError):
    """Guarded commit found the lot already taken"""

    def __init__(self, message: str = CONFLICT_MESSAGE):
        super().__init__(message)


def build_reserved_record(selected_property: Dict[str, Any], edited_fields: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Registro final: el lote seleccionado con las ediciones encima y Status = Reserved"""
    merged = dict(selected_property)
    merged.update(edited_fields or {})
    merged["Status"] = PropertyStatus.reserved.value
    return merged


class ReservationCommitter:
    """
    Escribe la reserva en la tabla del proyecto, buscando el lote por (Block, Lot).

    Sin guard dos sesiones con el mismo lote pueden confirmar y gana la
    última escritura; con guard el update solo toca lotes aún disponibles.
    """

    def __init__(self, engine: Engine, guarded: bool = RESERVATION_GUARD):
        self.engine = engine
        self.guarded = guarded

    def commit(self, selected_property: Optional[Dict[str, Any]], edited_fields: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        if not selected_property:
            raise ReservationError("Please select a property to proceed.")

        project = selected_property.get("Project")
        block = selected_property.get("Block")
        lot = selected_property.get("Lot")

        try:
            model = resolve_project(project)
            merged = build_reserved_record(selected_property, edited_fields)

            values = {}
            for column, value in merged.items():
                if column == "Project" or column in model.KEY_FIELDS:
                    continue
                if not model.has_column(column):
                    logger.warning(f"Ignoring unknown column '{column}' for {project}")
                    continue
                values[model.attribute(column)] = model.coerce(column, value)

            statement = update(model).where(
                model.attribute("Block") == block,
                model.attribute("Lot") == lot
            )
            if self.guarded:
                statement = statement.where(
                    func.lower(model.attribute("Status")) == PropertyStatus.available.value.lower()
                )
            statement = statement.values(values).execution_options(synchronize_session=False)

            with Session(self.engine) as session:
                result = session.execute(statement)
                if result.rowcount == 0:
                    session.rollback()
                    if self.guarded:
                        logger.warning(f"Reservation conflict on {project} block {block} lot {lot}")
                        raise ReservationConflictError()
                    logger.error(f"No row matched {project} block {block} lot {lot}")
                    raise ReservationError()
                session.commit()

        except ReservationError:
            raise
        except Exception as e:
            logger.error(f"Error saving reservation for {project} block {block} lot {lot}: {e}")
            raise ReservationError() from e

        logger.info(f"Reserved {project} block {block} lot {lot}")
        return merged


def mark_sold(engine: Engine, project: str, block: str, lot: str) -> Dict[str, Any]:
    """Pasar un lote de Reserved a Sold"""
    model = resolve_project(project)
    record = get_property(engine, project, block, lot)
    if record is None:
        raise PropertyNotFoundError(f"{project} block {block} lot {lot} not found")
    if not PropertyStatus.reserved.matches(record.get("Status")):
        raise PropertyStateError(
            f"Only reserved properties can be marked as sold (current status: {record.get('Status')})"
        )

    statement = update(model).where(
        model.attribute("Block") == block,
        model.attribute("Lot") == lot
    ).values({model.attribute("Status"): PropertyStatus.sold.value}).execution_options(synchronize_session=False)

    with Session(engine) as session:
        session.execute(statement)
        session.commit()

    logger.info(f"Marked {project} block {block} lot {lot} as sold")
    record["Status"] = PropertyStatus.sold.value
    return record
