from __future__ import annotations  # FastAPI server exposing the call-center training simulator

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import router
from config.settings import settings
from dialogue import Scenario, list_scenarios
from storage.migrate import migrate


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:  # Ensure the SQLite schema exists before serving
    migrate(settings.DB_PATH)
    logger.info("Storage ready at %s", settings.DB_PATH)
    yield


app = FastAPI(title="Simulador de Atendimento API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(router)


@app.get("/healthz")
def healthz() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/api/scenarios", response_model=List[Scenario])
def scenarios() -> List[Scenario]:  # Scenario catalog for the selection screen
    return list_scenarios()
