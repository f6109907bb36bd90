# ticketdesk/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ticketdesk.asset.routes import router as asset_router
from ticketdesk.category.routes import router as category_router
from ticketdesk.core.config import get_settings
from ticketdesk.core.database import Base, engine
from ticketdesk.core.errors import ServiceError
from ticketdesk.metrics.routes import router as metrics_router
from ticketdesk.ticket.routes import router as ticket_router
from ticketdesk.user.routes import router as user_router

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESC,
    version=settings.APP_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
        headers=headers,
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Internal server error"},
    )


# Routers; metrics before tickets so /api/tickets/metrics is not read as an id
app.include_router(user_router)
app.include_router(category_router)
app.include_router(metrics_router)
app.include_router(ticket_router)
app.include_router(asset_router)


@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}
