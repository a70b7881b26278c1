from __future__ import annotations

import functools
import logging
import time
from logging.config import dictConfig
from pathlib import Path
from typing import Any, Dict

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from backend.app.config import get_settings, safe_error_detail, settings_public_summary
from backend.app.credentials import CredentialStore, create_credential_store
from backend.app.middleware.request_id import RequestIdMiddleware
from backend.app.observability import get_request_id, logging_config
from backend.app.proof import ProofOrchestrator, ProofServiceError
from backend.app.providers import create_provider
from backend.app.schemas import (
    CredentialStatus,
    CredentialUpdate,
    ProofFailureResponse,
    ProofRequest,
    ProofResponse,
)
from backend.app.ux import RequestState, build_ux_headers

_settings = get_settings()

dictConfig(logging_config(_settings.log_level))
logger = logging.getLogger(__name__)

APP_VERSION = "0.3.0"
STATIC_DIR = Path(__file__).resolve().parent / "static"
_start_time = time.monotonic()

app = FastAPI(title="Natural Deduction Prover")
logger.info("[CFG] loaded", extra=settings_public_summary(_settings))

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIdMiddleware)


@functools.lru_cache(maxsize=1)
def get_credential_store() -> CredentialStore:
    return create_credential_store()


def get_orchestrator(store: CredentialStore = Depends(get_credential_store)) -> ProofOrchestrator:
    return ProofOrchestrator(create_provider(_settings), credential_store=store)


def _state_response(state: RequestState, status_code: int, request_id: str) -> JSONResponse:
    response = JSONResponse(status_code=status_code, content=state.to_payload())
    response.headers.update(build_ux_headers(state))
    response.headers["X-Request-ID"] = request_id
    return response


@app.get("/health")
async def health() -> Dict[str, Any]:
    return {
        "status": "ok",
        "version": APP_VERSION,
        "model": _settings.model_name,
        "uptime_seconds": int(time.monotonic() - _start_time),
    }


@app.get("/api/credential", response_model=CredentialStatus)
async def credential_status(store: CredentialStore = Depends(get_credential_store)) -> CredentialStatus:
    return CredentialStatus(present=bool(store.get()))


@app.put("/api/credential", response_model=CredentialStatus)
async def update_credential(
    payload: CredentialUpdate, store: CredentialStore = Depends(get_credential_store)
) -> CredentialStatus:
    value = payload.credential.strip()
    if value:
        store.set(value)
    else:
        store.remove()
    return CredentialStatus(present=bool(value))


@app.delete("/api/credential", response_model=CredentialStatus)
async def delete_credential(store: CredentialStore = Depends(get_credential_store)) -> CredentialStatus:
    store.remove()
    return CredentialStatus(present=False)


@app.post(
    "/api/proof",
    response_model=ProofResponse,
    responses={401: {"model": ProofFailureResponse}, 422: {"model": ProofFailureResponse}, 502: {"model": ProofFailureResponse}},
)
async def generate_proof(
    payload: ProofRequest,
    request: Request,
    orchestrator: ProofOrchestrator = Depends(get_orchestrator),
    store: CredentialStore = Depends(get_credential_store),
) -> JSONResponse:
    request_id = get_request_id(request)
    if payload.credential and payload.remember:
        try:
            store.set(payload.credential)
        except OSError as exc:
            logger.warning("[CRED] could not persist credential: %s", safe_error_detail(exc))

    try:
        result = await orchestrator.submit(payload.credential, payload.formula)
    except ProofServiceError as exc:
        info = exc.info
        logger.info(
            "[PROOF] request failed",
            extra={"request_id": request_id, "failure_type": info.failure_type.value},
        )
        return _state_response(RequestState.failed(info), info.status_code, request_id)

    return _state_response(RequestState.succeeded(result), 200, request_id)


app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="ui")
