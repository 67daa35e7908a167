"""
Property models - One inventory table per real-estate project, keyed by (Block, Lot)
"""
import math
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Tuple
from sqlalchemy import Column, Float, String, inspect as sa_inspect
from sqlmodel import SQLModel, Field


class PropertyStatus(str, Enum):
    """Lifecycle status of a lot"""
    available = "Available"
    reserved = "Reserved"
    sold = "Sold"

    def matches(self, value: Optional[str]) -> bool:
        """Case-insensitive comparison against a stored Status value"""
        return (value or "").strip().lower() == self.value.lower()


class ProjectProperty(SQLModel):
    """Behaviour shared by every project inventory table.

    Column names in the database are the labels the sales team uses
    ("Block", "Monthly Amortization", ...); attributes are snake_case.
    Records exchanged with the API are plain dicts keyed by column name
    and tagged with a "Project" entry.
    """

    PROJECT_NAME: ClassVar[str] = ""
    BUYER_FIELD: ClassVar[str] = ""
    CLEARED_ON_REOPEN: ClassVar[Tuple[str, ...]] = ()
    KEY_FIELDS: ClassVar[Tuple[str, ...]] = ("Block", "Lot")

    @classmethod
    def column_map(cls) -> Dict[str, str]:
        """Database column name -> model attribute name"""
        return {prop.columns[0].name: prop.key for prop in sa_inspect(cls).column_attrs}

    @classmethod
    def has_column(cls, column_name: str) -> bool:
        return column_name in cls.column_map()

    @classmethod
    def attribute(cls, column_name: str):
        """Instrumented attribute for a column name, usable in queries"""
        return getattr(cls, cls.column_map()[column_name])

    @classmethod
    def is_numeric(cls, column_name: str) -> bool:
        prop = sa_inspect(cls).column_attrs[cls.column_map()[column_name]]
        return isinstance(prop.columns[0].type, Float)

    @classmethod
    def coerce(cls, column_name: str, value: Any) -> Any:
        """Normalize a form value for a column: numeric fields take numbers or blank"""
        if not cls.is_numeric(column_name):
            return value
        if value is None or (isinstance(value, str) and value.strip() == ""):
            return None
        if isinstance(value, bool):
            raise ValueError(f"{column_name} must be a number")
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"{column_name} must be a number")
        # nan and inf parse as floats
        if not math.isfinite(number):
            raise ValueError(f"{column_name} must be a number")
        return number

    def to_record(self) -> Dict[str, Any]:
        record = {column: getattr(self, attr) for column, attr in self.column_map().items()}
        record["Project"] = self.PROJECT_NAME
        return record


class LivingWaterProperty(ProjectProperty, table=True):
    """Lots of the Living Water Subdivision project"""

    __tablename__ = "Living Water Subdivision"

    PROJECT_NAME: ClassVar[str] = "Living Water Subdivision"
    BUYER_FIELD: ClassVar[str] = "Owner"
    CLEARED_ON_REOPEN: ClassVar[Tuple[str, ...]] = (
        "Owner", "Broker", "Realty", "Reservation Date", "Reservation Fee",
        "Terms", "Monthly Amortization",
    )

    block: str = Field(sa_column=Column("Block", String, primary_key=True))
    lot: str = Field(sa_column=Column("Lot", String, primary_key=True))
    status: Optional[str] = Field(default=PropertyStatus.available.value, sa_column=Column("Status", String))

    # Pricing
    lot_area: Optional[float] = Field(default=None, sa_column=Column("Lot Area", Float))
    price_per_sqm: Optional[float] = Field(default=None, sa_column=Column("Price per sqm", Float))
    tcp: Optional[float] = Field(default=None, sa_column=Column("TCP", Float))
    monthly_amortization: Optional[float] = Field(default=None, sa_column=Column("Monthly Amortization", Float))
    terms: Optional[str] = Field(default=None, sa_column=Column("Terms", String))

    # Buyer and sales channel
    owner: Optional[str] = Field(default=None, sa_column=Column("Owner", String))
    broker: Optional[str] = Field(default=None, sa_column=Column("Broker", String))
    realty: Optional[str] = Field(default=None, sa_column=Column("Realty", String))

    # Reservation metadata
    reservation_date: Optional[str] = Field(default=None, sa_column=Column("Reservation Date", String))
    reservation_fee: Optional[float] = Field(default=None, sa_column=Column("Reservation Fee", Float))


class HavahillsProperty(ProjectProperty, table=True):
    """Lots of the Havahills Estate project"""

    __tablename__ = "Havahills Estate"

    PROJECT_NAME: ClassVar[str] = "Havahills Estate"
    BUYER_FIELD: ClassVar[str] = "Buyers Name"
    CLEARED_ON_REOPEN: ClassVar[Tuple[str, ...]] = (
        "Buyers Name", "Sales Director", "Agent", "Date of Reservation",
        "Reservation Amount", "Payment Terms", "Monthly Amortization",
    )

    block: str = Field(sa_column=Column("Block", String, primary_key=True))
    lot: str = Field(sa_column=Column("Lot", String, primary_key=True))
    status: Optional[str] = Field(default=PropertyStatus.available.value, sa_column=Column("Status", String))

    # Pricing
    lot_size: Optional[float] = Field(default=None, sa_column=Column("Lot Size", Float))
    selling_price: Optional[float] = Field(default=None, sa_column=Column("Selling Price", Float))
    tsp: Optional[float] = Field(default=None, sa_column=Column("TSP", Float))
    monthly_amortization: Optional[float] = Field(default=None, sa_column=Column("Monthly Amortization", Float))
    payment_terms: Optional[str] = Field(default=None, sa_column=Column("Payment Terms", String))

    # Buyer and sales channel
    buyers_name: Optional[str] = Field(default=None, sa_column=Column("Buyers Name", String))
    sales_director: Optional[str] = Field(default=None, sa_column=Column("Sales Director", String))
    agent: Optional[str] = Field(default=None, sa_column=Column("Agent", String))

    # Reservation metadata
    date_of_reservation: Optional[str] = Field(default=None, sa_column=Column("Date of Reservation", String))
    reservation_amount: Optional[float] = Field(default=None, sa_column=Column("Reservation Amount", Float))


PROJECT_MODELS = {
    LivingWaterProperty.PROJECT_NAME: LivingWaterProperty,
    HavahillsProperty.PROJECT_NAME: HavahillsProperty,
}
