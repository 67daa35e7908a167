"""
Database models for the Omniportal back office
"""

from .property import PropertyStatus, LivingWaterProperty, HavahillsProperty, PROJECT_MODELS
from .client import Client
from .document import Document
from .balance import Balance

__all__ = [
    "PropertyStatus", "LivingWaterProperty", "HavahillsProperty", "PROJECT_MODELS",
    "Client", "Document", "Balance",
]
