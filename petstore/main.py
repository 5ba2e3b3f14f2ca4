from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
import logging

from .config import get_settings
from .errors import InvalidInput, NotFoundError, PetstoreError, RedundantUsername
from .routers import pets, photos, store, users

settings = get_settings()

# Configurar logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Configurar rate limiting
limiter = Limiter(key_func=get_remote_address)

app = FastAPI(title=settings.app_name)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Configuración de CORS según entorno
if settings.env == "dev":
    cors_origins = ["http://localhost:5173", "http://127.0.0.1:5173"]
    cors_regex = r"https?://(localhost|127\.0\.0\.1)(:\d+)?"
else:
    frontend_url = settings.frontend_base_url
    cors_origins = [frontend_url] if frontend_url else []
    cors_regex = None

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_origin_regex=cors_regex,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept"],
)

# ---------- Errores del repositorio -> HTTP ----------

def status_for(exc: PetstoreError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, RedundantUsername):
        return 409
    if isinstance(exc, InvalidInput):
        return 400
    return 500

@app.exception_handler(PetstoreError)
async def petstore_error_handler(request: Request, exc: PetstoreError):
    return JSONResponse(status_code=status_for(exc), content={"detail": exc.message})

@app.get("/health")
async def health():
    return {"status": "ok", "env": settings.env}

# Routers
app.include_router(pets.router, prefix="/pet", tags=["pet"])
app.include_router(photos.router, prefix="/photos", tags=["photos"])
app.include_router(store.router, prefix="/store", tags=["store"])
app.include_router(users.router, prefix="/user", tags=["user"])
