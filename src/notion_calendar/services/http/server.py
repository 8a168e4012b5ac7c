from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ...api import get_api_functions, resolve_api
from ...api.registry import INVALID_REQUEST_MESSAGE
from ...bootstrap import configure_logging
from ...config import get_settings
from ...errors import EndpointNotFoundError, ProxyError


configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Notion Calendar Proxy", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().server.cors_allow_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    endpoint_name = request.path_params.get("endpoint_name")
    if endpoint_name is None:
        return _error(400, INVALID_REQUEST_MESSAGE)
    try:
        api_function = resolve_api(endpoint_name)
    except EndpointNotFoundError as not_found:
        logger.warning("API endpoint not found: %s", endpoint_name)
        return _error(not_found.status_code, str(not_found))
    logger.warning("API endpoint %s rejected malformed body: %s", api_function.name, exc.errors())
    return _error(400, f"{api_function.failure_message}: {INVALID_REQUEST_MESSAGE}")


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/api/endpoints")
def list_endpoints() -> JSONResponse:
    endpoints = [func.describe() for func in sorted(get_api_functions(), key=lambda item: item.name)]
    return JSONResponse({"endpoints": endpoints})


@app.post("/api/notion/{endpoint_name}")
def invoke_endpoint(endpoint_name: str, payload: Optional[Dict[str, Any]] = Body(default=None)) -> JSONResponse:
    try:
        api_function = resolve_api(endpoint_name)
    except EndpointNotFoundError as exc:
        logger.warning("API endpoint not found: %s", endpoint_name)
        return _error(exc.status_code, str(exc))

    try:
        result = api_function.invoke(payload)
    except ProxyError as exc:
        logger.warning("API endpoint %s rejected request: %s", api_function.name, exc)
        return _error(exc.status_code, f"{api_function.failure_message}: {exc}")
    except Exception as exc:  # noqa: BLE001
        logger.exception("API endpoint %s failed", api_function.name)
        return _error(500, f"{api_function.failure_message}: {exc}")

    logger.debug("API endpoint %s executed successfully", api_function.name)
    return JSONResponse({"success": True, **result})


def run_local_server(host: Optional[str] = None, port: Optional[int] = None) -> None:
    import asyncio
    from hypercorn.asyncio import serve
    from hypercorn.config import Config

    settings = get_settings().server
    config = Config()
    config.bind = [f"{host or settings.host}:{port or settings.port}"]
    logger.info("Notion calendar proxy listening on %s", config.bind[0])
    asyncio.run(serve(app, config))
