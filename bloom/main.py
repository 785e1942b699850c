import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bloom.analysis import routes as analysis_router
from bloom.analytics import routes as analytics_router
from bloom.auth import routes as auth_router
from bloom.core.config import CORS_ORIGINS, LOG_LEVEL
from bloom.core.database import Base, engine
from bloom.export import routes as export_router
from bloom.goals import routes as goals_router
from bloom.journals import routes as journals_router
from bloom.metrics import routes as metrics_router
from bloom.support import routes as support_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Inner Thought Bloom API",
    version="1.0.0",
    description="Backend for Inner Thought Bloom: journaling, wellness tracking, goals and mood analytics.",
)

# CORS config
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(auth_router.router)
app.include_router(journals_router.router)
app.include_router(metrics_router.router)
app.include_router(goals_router.router)
app.include_router(analysis_router.router)
app.include_router(analytics_router.router)
app.include_router(export_router.router)
app.include_router(support_router.router)


# DB Tables
@app.on_event("startup")
def create_tables():
    Base.metadata.create_all(bind=engine)


@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}
