import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kiosk.api import auth, profiles, categories, products, subscriptions, sales
from kiosk.core.config import settings
from kiosk.core.errors import ConstraintViolation, KioskError
from kiosk.core.logging import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Per-user catalog, sales and subscription-gated access for small shops",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KioskError)
async def kiosk_error_handler(request: Request, exc: KioskError):
    body = {"detail": exc.detail, "code": exc.code}
    if isinstance(exc, ConstraintViolation):
        body["constraint"] = exc.constraint
    return JSONResponse(status_code=exc.status_code, content=body)


# Routers
app.include_router(auth.router)
app.include_router(profiles.router)
app.include_router(categories.router)
app.include_router(products.router)
app.include_router(subscriptions.router)
app.include_router(sales.router)


@app.get("/health")
async def health_check():
    return {"status": "ok", "version": "0.1.0"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("kiosk.main:app", host=settings.HOST, port=settings.PORT, reload=False)

