"""FastAPI application wiring for Wasteland."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wasteland import __version__
from wasteland.api import routes
from wasteland.api.runtime import ApiState, build_state
from wasteland.config import get_settings
from wasteland.domain.errors import InvalidInputError

logger = logging.getLogger(__name__)


async def _invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
    logger.warning("rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def create_app(*, state_factory: Callable[[], ApiState] = build_state) -> FastAPI:
    """Build the API around the game state returned by ``state_factory``.

    The state is created when the app starts, so a test can swap in a small
    hand-built world before any request is served.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        state = state_factory()
        app.state.api_state = state
        world = state.game.world
        logger.info(
            "serving world radius=%s seed=%s with %s starting locations",
            world.radius,
            world.seed,
            len(world.starting_locations),
        )
        try:
            yield
        finally:
            await state.shutdown()

    app = FastAPI(title="Wasteland API", version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_exception_handler(InvalidInputError, _invalid_input)
    app.include_router(routes.router)
    return app


app = create_app()
