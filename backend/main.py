from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import Engine

from app.api import routes_booking, routes_health
from app.core.config import settings
from app.core.errors import ApiError
from app.core.logging import configure_logging
from app.storage.database import build_engine, build_session_factory, init_db


async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def create_app(engine: Engine | None = None) -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.app_name, version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ApiError, handle_api_error)

    engine = engine or build_engine()
    init_db(engine)

    app.include_router(routes_health.router, tags=["health"])
    app.include_router(routes_booking.router, prefix="/bookings", tags=["bookings"])

    # Dependencies open one session per request from this factory
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.settings = settings
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
