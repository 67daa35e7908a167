"""
Balance model - Amortization tracking for a buyer's lot
"""
from typing import Optional
from sqlalchemy import Column, Float, String
from sqlmodel import SQLModel, Field

class Balance(SQLModel, table=True):
    """Balance table; one row per buyer and lot, matched to clients by Name"""
    
    __tablename__ = "Balance"
    
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(sa_column=Column("Name", String, index=True))
    
    # Amounts
    remaining_balance: Optional[float] = Field(default=None, sa_column=Column("Remaining Balance", Float))
    amount: Optional[float] = Field(default=None, sa_column=Column("Amount", Float))
    tcp: Optional[float] = Field(default=None, sa_column=Column("TCP", Float))
    months_paid: Optional[str] = Field(default=None, sa_column=Column("Months Paid", String))
    terms: Optional[str] = Field(default=None, sa_column=Column("Terms", String))
    
    # Lot reference
    project: Optional[str] = Field(default=None, sa_column=Column("Project", String))
    block: Optional[str] = Field(default=None, sa_column=Column("Block", String))
    lot: Optional[str] = Field(default=None, sa_column=Column("Lot", String))
