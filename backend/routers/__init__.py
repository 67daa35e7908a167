# Routers package
from .inventory import router as inventory_router
from .deals import router as deals_router
from .properties import router as properties_router
