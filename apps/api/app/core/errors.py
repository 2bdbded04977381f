from typing import NoReturn

from fastapi import HTTPException


def http_error_detail(code: str, message: str) -> dict[str, str]:
    return {"code": code, "message": message}


def raise_http_error(status_code: int, code: str, message: str) -> NoReturn:
    raise HTTPException(status_code=status_code, detail=http_error_detail(code, message))


def raise_invalid_link() -> NoReturn:
    # Malformed, forged and expired links share one answer.
    raise_http_error(403, "INVALID_OR_EXPIRED_LINK", "This link is invalid or has expired")


def raise_product_not_found() -> NoReturn:
    raise_http_error(
        404,
        "PRODUCT_NOT_FOUND",
        "This listing no longer exists; the request has most likely been handled already",
    )
