"""
Backend API - Omniportal back office
"""
from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from config.app_config import API_VERSION, CORS_ORIGINS, LOG_LEVEL

# Configurar logging
logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

from config.db_connection import init_db
from services.clock import get_local_now


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Inicializar base de datos al arrancar
    init_db()
    logger.info("Database tables initialized")
    yield


# Crear aplicación FastAPI
app = FastAPI(title="Omniportal API", version=API_VERSION, lifespan=lifespan)

# Configurar CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Importar routers
from routers.inventory import router as inventory_router
from routers.deals import router as deals_router
from routers.properties import router as properties_router

# Registrar routers
app.include_router(inventory_router)
app.include_router(deals_router)
app.include_router(properties_router)


@app.get("/")
async def root():
    """Endpoint raíz"""
    return {"message": "Omniportal API is running", "timestamp": get_local_now(), "version": API_VERSION}


@app.get("/health")
async def health():
    """Endpoint de healthcheck para Docker"""
    return {"status": "healthy", "timestamp": get_local_now()}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
