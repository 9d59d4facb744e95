"""
Shared FastAPI dependencies for resource routes.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request


async def json_body(request: Request) -> Any:
    """
    Parsed JSON request body, or None when the body is empty or not JSON.

    None then fails schema validation, so a malformed body gets the
    resource's own 400 message.
    """
    try:
        return await request.json()
    except ValueError:
        return None
