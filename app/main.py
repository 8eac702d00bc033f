import app.db.base  # noqa: F401
import app.models  # noqa: F401

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from app.core.config import settings
from app.api.routes.health import router as health_router
from app.api.routes.friendship_requests import router as friendship_requests_router
from app.api.routes.my_friends import router as my_friends_router


def configure_logging(level: str) -> None:
    # basicConfig leaves an already configured root (uvicorn --log-config) alone.
    logging.basicConfig(format="%(asctime)s %(levelname)-5.5s [%(name)s] %(message)s")
    logging.getLogger("app").setLevel(level)


configure_logging(settings.log_level)

logger = logging.getLogger(__name__)
app = FastAPI(title="Friendship API", version="0.1.0")

local_cors_origin_regex = (
    r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$"
    if settings.env in {"local", "test"}
    else None
)

@app.exception_handler(Exception)
async def debug_exception_handler(request: Request, exc: Exception):
    if settings.env in {"local", "test"}:
        return PlainTextResponse(
            "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            status_code=500,
        )
    logger.exception("Unhandled exception for %s %s", request.method, request.url.path)
    return PlainTextResponse("Internal Server Error", status_code=500)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list(),
    allow_origin_regex=local_cors_origin_regex,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(friendship_requests_router)
app.include_router(my_friends_router)
