"""Shared FastAPI dependencies."""

from fastapi import Request

from leavedesk.store.base import LeaveStore


async def get_store(request: Request) -> LeaveStore:
    """Return the store chosen by the app factory (possibly swapped to demo data at startup)."""
    return request.app.state.store
