"""
Shared FastAPI dependencies.

Post payloads are read by hand rather than through a pydantic body
parameter so that the endpoints accept the same bodies as the
frontend and plain HTML forms send:

* ``application/json`` objects;
* ``application/x-www-form-urlencoded`` forms, where nested image
  fields use bracket keys such as ``images[0][url]``;
* an empty body, which is treated as an empty payload.

Invalid JSON and wrongly typed fields raise ``RequestValidationError``
and are answered with status 400 by the error handler.
"""

import json
import re
from typing import Any, Dict, List, Tuple

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from blog_api.app.schemas.post import PostCreate, PostUpdate
from blog_api.app.services.post_service import PostStore

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# images[0][url] -> ("images", "0", "url")
_IMAGE_KEY = re.compile(r"^images\[(\d+)\]\[(url|prompt)\]$")


def get_post_store(request: Request) -> PostStore:
    """Return the store owned by the running application."""
    return request.app.state.post_store


def _invalid_body(error_type: str, message: str) -> RequestValidationError:
    return RequestValidationError(
        [{"type": error_type, "loc": ("body",), "msg": message, "input": None}]
    )


def form_to_payload(items: List[Tuple[str, Any]]) -> Dict[str, Any]:
    """Turn url-encoded form items into a post payload.

    ``images[<n>][url]`` / ``images[<n>][prompt]`` keys are collected
    into the ``images`` list ordered by ``n``; every other key is kept
    as a plain string field (the last value wins for repeated keys).
    """
    payload: Dict[str, Any] = {}
    images: Dict[int, Dict[str, Any]] = {}
    for key, value in items:
        match = _IMAGE_KEY.match(key)
        if match:
            images.setdefault(int(match.group(1)), {})[match.group(2)] = value
        else:
            payload[key] = value
    if images:
        payload["images"] = [images[index] for index in sorted(images)]
    return payload


async def read_post_payload(request: Request) -> Dict[str, Any]:
    """Read the request body as a dictionary of post fields."""
    # Read the raw bytes first; Starlette caches them, so the form
    # parser below and the error handler can both reuse them.
    body = await request.body()
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPE):
        form = await request.form()
        return form_to_payload(form.multi_items())
    if not body.strip():
        return {}
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise _invalid_body("json_invalid", f"JSON decode error: {exc}") from exc
    if not isinstance(payload, dict):
        raise _invalid_body("model_attributes_type", "Request body must be a JSON object")
    return payload


def _validate(model, payload: Dict[str, Any]):
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        errors = [{**error, "loc": ("body", *error["loc"])} for error in exc.errors()]
        raise RequestValidationError(errors) from exc


async def get_post_create(payload: Dict[str, Any] = Depends(read_post_payload)) -> PostCreate:
    return _validate(PostCreate, payload)


async def get_post_update(payload: Dict[str, Any] = Depends(read_post_payload)) -> PostUpdate:
    return _validate(PostUpdate, payload)
