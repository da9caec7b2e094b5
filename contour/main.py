import logging

from contour import config

# Log configuration (before other imports)
# ruff: noqa: E402
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from contour import __version__  # noqa: E402
from contour.api.base import api_router  # noqa: E402
from contour.services.commands import register_all_commands  # noqa: E402

app = FastAPI(
    title="Contour Engine API",
    description="Composer input classification and embedded tools",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_all_commands()

app.include_router(api_router)


@app.get("/")
def read_root():
    return {
        "message": "Contour Engine API",
        "docs": "/docs",
        "version": __version__
    }
