import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.deps import get_settings
from src.app_shell.config import validate_rules
from src.rules.loader import load_rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Load rules and validate on startup (fail-fast)
    try:
        rules = load_rules(settings.rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.critical("Rules load failed: %s", e)
        print(f"CRITICAL: Rules load failed: {e}", file=sys.stderr)
        sys.exit(1)
    validate_rules(rules)
    logger.info("Rules loaded from %s", settings.rules_path)

    yield


app = FastAPI(
    title="Brandkit API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from src.api.routes import colors, palettes, tokens, typography  # noqa: E402

app.include_router(palettes.router, prefix="/api/palettes", tags=["Palettes"])
app.include_router(colors.router, prefix="/api/colors", tags=["Colors"])
app.include_router(typography.router, prefix="/api/typography", tags=["Typography"])
app.include_router(tokens.router, prefix="/api/tokens", tags=["Tokens"])


# CORS (Allow Frontend)
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}
