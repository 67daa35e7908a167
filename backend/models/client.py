"""
Client model - Buyers registered in the back office
"""
from typing import Optional
from sqlalchemy import Column, String
from sqlmodel import SQLModel, Field

class Client(SQLModel, table=True):
    """Clients table, linked to properties and documents by Name"""
    
    __tablename__ = "Clients"
    
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(sa_column=Column("Name", String, index=True))
    email: Optional[str] = Field(default=None, sa_column=Column("Email", String))
    auth_id: Optional[str] = Field(default=None, description="Auth provider user id for the client portal")
