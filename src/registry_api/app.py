"""Runtime entrypoint that layers custom behaviour on the generated FastAPI app."""

from __future__ import annotations

import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from registry_api import main as generated_main
from registry_api.config.settings import get_settings
from registry_api.db.migrations import upgrade_database
from registry_api.http import install_exception_handlers
from registry_api.storage import get_storage

LOGGER = logging.getLogger(__name__)

settings = get_settings()

app = generated_main.app

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_exception_handlers(app)

# only the document bucket is public; tarballs go through the download route
_storage = get_storage()
app.mount(
    f"/storage/{_storage.bucket}",
    StaticFiles(directory=str(_storage.bucket_root(_storage.bucket)), check_dir=False),
    name="storage",
)


@app.on_event("startup")
async def _startup() -> None:
    if settings.auto_migrate:
        upgrade_database()
    else:
        LOGGER.info("Automatic migrations disabled; assuming schema is current")
