"""Turn handler results into HTTP responses."""

from collections.abc import Callable
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.responses import Response

from guestbook.schemas.results import ActionError, ActionResult, Ok, Redirect, RedirectRequired


def to_response(result: ActionResult, *, error_key: str = "error") -> Response:
    """Dispatch on result.kind: redirects carry their cookies, errors become 400 JSON bodies."""
    if isinstance(result, Redirect):
        response = RedirectResponse(url=result.location, status_code=result.status_code)
        for cookie in result.cookies:
            response.set_cookie(
                cookie.name,
                cookie.value,
                max_age=cookie.max_age,
                expires=cookie.expires,
                path=cookie.path,
                secure=cookie.secure,
                httponly=cookie.httponly,
                samesite=cookie.samesite,
            )
        return response
    if isinstance(result, ActionError):
        return JSONResponse({error_key: result.message}, status_code=400)
    if isinstance(result, Ok):
        return JSONResponse(jsonable_encoder(result.data), status_code=200)
    raise TypeError(f"Unsupported handler result: {result!r}")


def run_handler(
    handler: Callable[..., ActionResult],
    *args: Any,
    error_key: str = "error",
    **kwargs: Any,
) -> Response:
    """Call handler and dispatch its result; RedirectRequired becomes a redirect."""
    try:
        result = handler(*args, **kwargs)
    except RedirectRequired as e:
        result = e.to_result()
    return to_response(result, error_key=error_key)
