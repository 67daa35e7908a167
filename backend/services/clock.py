"""
Servicio de hora local reutilizable
"""
from datetime import datetime
import pytz
from config.app_config import APP_TIMEZONE

LOCAL_TZ = pytz.timezone(APP_TIMEZONE)


def get_local_now():
    """Obtener la hora actual en la zona horaria configurada"""
    return datetime.now(LOCAL_TZ)
