#!/usr/bin/env python3
"""
Initialize database tables
"""
from sqlmodel import SQLModel
from config.db_connection import engine, get_database_url
from models import LivingWaterProperty, HavahillsProperty, Client, Document, Balance  # noqa: F401

def init_tables():
    """Initialize all tables"""
    print(f"Connecting to database: {get_database_url()}")
    
    print("Creating tables...")
    SQLModel.metadata.create_all(engine)
    print("Tables created successfully!")

if __name__ == "__main__":
    init_tables()
