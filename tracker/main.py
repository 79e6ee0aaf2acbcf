# tracker/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tracker.auth.routes import router as auth_router
from tracker.comment.routes import router as comment_router
from tracker.core.config import get_settings
from tracker.core.database import Base, engine
from tracker.core.errors import register_exception_handlers
from tracker.core.log_config import RequestLoggingMiddleware, setup_logging
from tracker.ticket.routes import router as ticket_router

setup_logging()

Base.metadata.create_all(bind=engine)

settings = get_settings()
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESC,
    version=settings.APP_VERSION,
)

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Routers
app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(ticket_router, prefix=settings.API_PREFIX)
app.include_router(comment_router, prefix=settings.API_PREFIX)


@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}
