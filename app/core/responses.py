"""
Standard success envelopes

    {"success": true, "data": ..., "message": "..."}

Paginated lists add a `meta` object with current_page, last_page,
per_page and total.
"""
import math
from typing import Any, Dict, Iterable, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(
    data: Any = None,
    message: str = "Success",
    status_code: int = 200,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": True,
            "data": jsonable_encoder(data),
            "message": message,
        },
    )


def pagination_meta(total: int, page: int, per_page: int) -> Dict[str, int]:
    last_page = max(1, math.ceil(total / per_page)) if per_page else 1
    return {
        "current_page": page,
        "last_page": last_page,
        "per_page": per_page,
        "total": total,
    }


def paginated_response(
    items: Iterable[Any],
    total: int,
    page: int,
    per_page: int,
    message: str = "Data retrieved successfully",
    extra: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    content = {
        "success": True,
        "data": jsonable_encoder(list(items)),
        "message": message,
        "meta": pagination_meta(total, page, per_page),
    }
    if extra:
        content.update(extra)
    return JSONResponse(status_code=200, content=content)
