"""
Asistente de cierre de trato - Pasos del wizard y estado de la sesión
"""
import logging
from typing import Any, Dict, List, Optional
from services.inventory_service import UnknownProjectError, resolve_project
from services.reservation_service import ReservationError

logger = logging.getLogger(__name__)

STEPS = ("inventory", "documents", "soa", "payment", "balance", "finish", "account")

STEP_LABELS = {
    "inventory": "Inventory",
    "documents": "Documents",
    "soa": "Statement of Account",
    "payment": "Payment",
    "balance": "Balance",
    "finish": "Finish",
    "account": "Account Creation",
}

SELECTION_STEP = "inventory"
COMMIT_STEP = "account"
COMPLETED_STEP = "finish"

SELECT_PROPERTY_MESSAGE = "Please select a property to proceed."


class DealWizard:
    """
    Estado en memoria de un cierre de trato.

    current_step_index moves through STEPS; selected_property is a snapshot
    of the chosen lot (a record dict tagged with Project) and edited_fields
    holds overrides keyed by column name. Nothing here touches the database
    except the committer passed to advance() on the account step.
    """

    def __init__(self):
        self.current_step_index = 0
        self.selected_property: Optional[Dict[str, Any]] = None
        self.edited_fields: Dict[str, Any] = {}
        self.message: Optional[str] = None
        self.completed = False

    @property
    def current_step(self) -> str:
        return STEPS[self.current_step_index]

    @property
    def last_index(self) -> int:
        return len(STEPS) - 1

    def advance(self, committer=None) -> bool:
        """Avanzar al siguiente paso; en el paso de cuenta confirma la reserva"""
        self.message = None

        if self.current_step == SELECTION_STEP and self.selected_property is None:
            self.message = SELECT_PROPERTY_MESSAGE
            return False

        if self.current_step == COMMIT_STEP:
            if committer is None:
                raise ValueError("A committer is required on the account step")
            try:
                committer.commit(self.selected_property, self.edited_fields)
            except ReservationError as e:
                self.message = e.message
                return False
            self.current_step_index = STEPS.index(COMPLETED_STEP)
            self.completed = True
            return True

        self.current_step_index = min(self.current_step_index + 1, self.last_index)
        return True

    def retreat(self) -> bool:
        self.message = None
        self.current_step_index = max(self.current_step_index - 1, 0)
        return True

    def jump_to(self, index: int) -> bool:
        """Volver a un paso anterior; saltar hacia adelante no hace nada"""
        if 0 <= index < self.current_step_index:
            self.message = None
            self.current_step_index = index
            return True
        return False

    def select_property(self, record: Dict[str, Any]) -> bool:
        """Elegir el lote; descarta las ediciones del lote anterior"""
        if self.current_step != SELECTION_STEP:
            self.message = "Properties can only be selected on the inventory step."
            return False
        self.message = None
        self.selected_property = dict(record)
        self.edited_fields = {}
        return True

    def edit_field(self, field: str, value: Any) -> bool:
        if self.selected_property is None:
            self.message = "Select a property before editing its details."
            return False

        project = self.selected_property.get("Project")
        try:
            model = resolve_project(project)
        except UnknownProjectError as e:
            logger.error(f"Selected property has an unknown project: {e}")
            self.message = f"Unknown project: {project}"
            return False

        if field == "Project" or field in model.KEY_FIELDS:
            self.message = f"{field} cannot be edited."
            return False
        if not model.has_column(field):
            self.message = f"{field} is not a field of {project}."
            return False
        try:
            value = model.coerce(field, value)
        except ValueError as e:
            self.message = str(e)
            return False

        self.message = None
        self.edited_fields[field] = value
        return True

    def merged_property(self) -> Optional[Dict[str, Any]]:
        """Vista previa del lote con las ediciones aplicadas"""
        if self.selected_property is None:
            return None
        merged = dict(self.selected_property)
        merged.update(self.edited_fields)
        return merged

    def steps(self) -> List[Dict[str, Any]]:
        return [
            {
                "index": index,
                "key": step,
                "label": STEP_LABELS[step],
                "current": index == self.current_step_index,
                # only earlier steps can be clicked
                "reachable": index < self.current_step_index,
            }
            for index, step in enumerate(STEPS)
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_step_index": self.current_step_index,
            "current_step": self.current_step,
            "steps": self.steps(),
            "selected_property": self.selected_property,
            "edited_fields": self.edited_fields,
            "merged_property": self.merged_property(),
            "message": self.message,
            "completed": self.completed,
        }
