from collections.abc import Callable
from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

OPENAPI_TAGS_METADATA = [
    {
        "name": "health",
        "description": "Runtime liveness/readiness check for the API and PostgreSQL.",
    },
    {
        "name": "products",
        "description": "Public catalog; writes require an admin session.",
    },
    {
        "name": "categories",
        "description": "Public category list; changes require an admin session.",
    },
    {
        "name": "settings",
        "description": "Store profile shown on the site and used in emails.",
    },
    {
        "name": "product-requests",
        "description": "Anonymous listing submissions and their moderation.",
    },
    {
        "name": "owner-actions",
        "description": "Endpoints redeemed with the capability links emailed to submitters.",
    },
    {
        "name": "deletion-requests",
        "description": "Owner deletion requests and their moderation.",
    },
    {
        "name": "admin",
        "description": "Admin session login.",
    },
]

API_DESCRIPTION = """
## Spotted marketplace API

Public catalog, anonymous submissions, and moderation workflows.

### Owner links
When a submission is approved its submitter receives two links carrying a
signed capability token (`?token=...`), valid for 30 days:
`/verify-sale` and `/delete-request`. The token alone identifies the listing;
no account is needed.

### Admin auth
Moderation routes require `Authorization: Bearer <token>` obtained from
`POST /admin/login`.

### Error format
Business errors are returned as:

```json
{"detail": {"code": "SOME_CODE", "message": "Human readable message"}}
```
"""


def _error_example(description: str, code: str, message: str) -> dict[str, Any]:
    return {
        "description": description,
        "content": {
            "application/json": {"example": {"detail": {"code": code, "message": message}}}
        },
    }


LINK_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    403: _error_example(
        "Capability link is malformed, forged or expired.",
        "INVALID_OR_EXPIRED_LINK",
        "This link is invalid or has expired",
    ),
    404: _error_example(
        "The listing behind a valid link no longer exists.",
        "PRODUCT_NOT_FOUND",
        "This listing no longer exists; the request has most likely been handled already",
    ),
}

ADMIN_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: _error_example(
        "Missing or invalid admin session.",
        "AUTH_ADMIN_MISSING",
        "Missing Authorization header",
    ),
    409: _error_example(
        "The request was already reviewed.",
        "REQUEST_ALREADY_REVIEWED",
        "Deletion request was already reviewed",
    ),
}


def install_custom_openapi(app: FastAPI) -> Callable[[], dict[str, Any]]:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        schema = get_openapi(
            title=app.title,
            version=app.version,
            summary=app.summary,
            description=app.description,
            routes=app.routes,
            tags=OPENAPI_TAGS_METADATA,
            servers=app.servers,
            contact=app.contact,
        )

        app.openapi_schema = schema
        return app.openapi_schema

    return custom_openapi
