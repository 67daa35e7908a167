"""
Document model - Requirements collected from a buyer (TIN, contact, civil status)
"""
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import Column, String
from sqlmodel import SQLModel, Field

class Document(SQLModel, table=True):
    """Documents table; rows belong to a client through the Name column"""
    
    __tablename__ = "Documents"
    
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(sa_column=Column("Name", String, index=True))
    
    # Buyer information
    address: Optional[str] = Field(default=None, sa_column=Column("Address", String))
    tin_id: Optional[str] = Field(default=None, sa_column=Column("TIN ID", String))
    email: Optional[str] = Field(default=None, sa_column=Column("Email", String))
    contact_no: Optional[str] = Field(default=None, sa_column=Column("Contact No", String))
    marital_status: Optional[str] = Field(default=None, sa_column=Column("Marital Status", String))
    
    # Storage reference of the uploaded file
    file_url: Optional[str] = Field(default=None, description="Path of the file in the documents bucket")
    
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), description="Upload timestamp")
