from __future__ import annotations

import os
from typing import Optional

from fastapi import Header, HTTPException, Request

from src.resolution.bootstrap import ResolverRuntime
from src.resolution.exceptions import EntityResolverError
from src.utils.logger import logger


# Shared FastAPI router dependencies and helpers


def _required_api_key() -> Optional[str]:
    return os.environ.get("RESOLVER_API_TOKEN")


def _validate_api_key(auth_header: Optional[str]):
    required = _required_api_key()
    if not required:
        logger.error("Router: missing RESOLVER_API_TOKEN in environment")
        raise HTTPException(status_code=500, detail={
            "error": {
                "message": "Server missing API key configuration.",
                "type": "server_error",
                "param": None,
                "code": None
            }
        })
    if not auth_header or not auth_header.startswith("Bearer "):
        logger.warning("Router: missing or malformed Authorization header")
        raise HTTPException(status_code=401, detail={
            "error": {
                "message": "You didn't provide an API key.",
                "type": "invalid_request_error",
                "param": None,
                "code": None
            }
        })
    token_value = auth_header.split("Bearer ")[-1].strip()
    if token_value != required:
        logger.warning("Router: incorrect API key provided")
        raise HTTPException(status_code=401, detail={
            "error": {
                "message": "Incorrect API key provided.",
                "type": "invalid_request_error",
                "param": None,
                "code": None
            }
        })


def require_api_key(authorization: Optional[str] = Header(default=None)) -> None:
    _validate_api_key(authorization)


def get_runtime(request: Request) -> ResolverRuntime:
    runtime = getattr(request.app.state, "resolver_runtime", None)
    if runtime is None:
        logger.error("Router: resolver runtime not initialized")
        raise HTTPException(status_code=503, detail={
            "error": {
                "message": "Resolver runtime is not initialized.",
                "type": "server_error",
                "param": None,
                "code": None
            }
        })
    return runtime


def _raise_http(error: EntityResolverError) -> None:
    """Map a resolver exception onto the API error envelope."""
    error_type = "invalid_request_error" if error.code < 500 else "server_error"
    raise HTTPException(status_code=error.code, detail={
        "error": {
            "message": error.message,
            "type": error_type,
            "param": None,
            "code": error.code,
            "retryable": error.retryable,
        }
    }) from error
