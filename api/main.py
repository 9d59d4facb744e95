import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from businesses import router as businesses_router
from core import bootstrap, db
from photos import router as photos_router
from reviews import router as reviews_router
from users import router as users_router

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize the DB pool and schema once per process.
    await db.init_pool()
    try:
        app.state.schema_report = await bootstrap.ensure_schema()
        yield
    finally:
        await db.close_pool()


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(businesses_router.router, tags=["businesses"])
app.include_router(reviews_router.router, tags=["reviews"])
app.include_router(photos_router.router, tags=["photos"])
app.include_router(users_router.router, tags=["users"])


@app.get("/health")
def health() -> dict:
    report = getattr(app.state, "schema_report", None)
    missing = list(report.missing_tables) if report is not None else []
    return {"status": "ok", "missing_tables": missing}


@app.get("/")
def root() -> dict:
    return {"message": "business directory api"}
