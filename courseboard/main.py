# courseboard/main.py
from contextlib import asynccontextmanager
import logging
import sys
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from courseboard.core.config import settings
from courseboard.repositories.google_classroom import GoogleClassroomRepository, build_credentials
from courseboard.routers.v1 import health
from courseboard.routers.v1 import classroom
from courseboard.routers.v1 import aggregates

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
    stream=sys.stdout,
)

# il client google è molto verboso a DEBUG
logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)

log = logging.getLogger("courseboard")


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.classroom_repo = None
        if settings.has_credentials:
            creds = build_credentials(
                client_id=settings.google_client_id,
                client_secret=settings.google_client_secret,
                refresh_token=settings.google_refresh_token,
                token_uri=settings.google_token_uri,
                scopes=settings.google_scopes,
            )
            try:
                app.state.classroom_repo = GoogleClassroomRepository(creds)
            except Exception:
                log.exception("Creazione client Google Classroom fallita")
        else:
            log.error("No refresh token found. Set GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET and GOOGLE_REFRESH_TOKEN.")

        yield

    app = FastAPI(
        title="Courseboard Service",
        description="Viste aggregate su corsi, compiti e voti di Google Classroom",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins, allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )

    app.include_router(health.router,     prefix="/api/v1", tags=["health"])
    app.include_router(classroom.router,  prefix="/api/v1", tags=["classroom"])
    app.include_router(aggregates.router, prefix="/api/v1", tags=["aggregates"])
    return app

app = create_app()
