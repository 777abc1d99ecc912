from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookmarks import router as bookmarks_router
from code_snippets import router as code_snippets_router
from contact import router as contact_router
from core import config, db, errors
from core.log import configure_logging
from diagrams import router as diagrams_router
from notes import router as notes_router
from tags import router as tags_router

configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="Turbodoc API", version="1.0.0", lifespan=lifespan)

# Native apps send no Origin header; browsers only from the known frontends.
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "token", "Baggage", "sentry-trace"],
)

errors.register_handlers(app)

app.include_router(bookmarks_router.router, tags=["bookmarks"])
app.include_router(tags_router.router, tags=["tags"])
app.include_router(notes_router.router, tags=["notes"])
app.include_router(code_snippets_router.router, tags=["code-snippets"])
app.include_router(diagrams_router.router, tags=["diagrams"])
app.include_router(contact_router.router, tags=["contact"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
