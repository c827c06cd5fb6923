import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import CORS_ORIGINS, LOG_LEVEL
from app.core.errors import NotFoundError

# IMPORTANTE: Importar Base y Engine para que funcione la creación de tablas
from app.db.session import engine, Base

# Importar modelos para que SQLAlchemy los "vea" antes de crear las tablas
from app.db.models import _all  # noqa: F401

# Importar las rutas (los routers)
from app.api.auth import router as auth_router
from app.api.users import router as users_router
from app.api.teams import router as teams_router
from app.api.championships import router as championships_router
from app.api.events import router as events_router
from app.api.results import router as results_router
from app.api.calendar import router as calendar_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Race Team Dashboard",
    version="1.0.0"
)

# Creamos las tablas en la base de datos
Base.metadata.create_all(bind=engine)

# Conectamos las piezas (routers)
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(teams_router)
app.include_router(championships_router)
app.include_router(events_router)
app.include_router(results_router)
app.include_router(calendar_router)


@app.exception_handler(NotFoundError)
def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


# Configuramos el permiso para que el frontend pueda hablar con Python
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
def read_root():
    return {"message": "API Race Team Dashboard funcionando 🏁"}
