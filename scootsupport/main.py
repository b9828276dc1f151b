import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from scootsupport.core.config import settings
from scootsupport.core.database import engine, Base
from scootsupport.core.exceptions import AppException
from scootsupport.models import user, chat, support  # noqa: F401 (register tables)
from scootsupport.controllers import (
    auth_controller, chat_controller, escalation_controller, faq_controller, order_controller
)
from scootsupport.utils.response import error_response

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger("main")

Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error_code} {exc.message} {exc.details or ''}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.error_code} {exc.message}")
    body = error_response(message=exc.message, error=exc.to_dict())
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())

API_PREFIX = getattr(settings, "api_prefix", "/api/v1")

# Include routers
app.include_router(auth_controller.router, prefix=API_PREFIX)
app.include_router(chat_controller.router, prefix=API_PREFIX)
app.include_router(escalation_controller.router, prefix=API_PREFIX)
app.include_router(faq_controller.router, prefix=API_PREFIX)
app.include_router(order_controller.router, prefix=API_PREFIX)

# Health check endpoint
@app.get("/")
async def root():
    return {
        "message": "ScootSupport Customer Support API",
        "version": "1.0.0",
        "status": "running",
        "endpoints": [
            f"{API_PREFIX}/auth/",
            f"{API_PREFIX}/chat/",
            f"{API_PREFIX}/escalations/",
            f"{API_PREFIX}/faqs/",
            f"{API_PREFIX}/orders/",
            "/docs"
        ]
    }

@app.get("/health")
async def health_check():
    return {"status": "healthy", "app": settings.app_name}

def run():
    import uvicorn
    uvicorn.run(
        "scootsupport.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )

if __name__ == "__main__":
    run()
