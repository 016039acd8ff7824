"""FastAPI dependencies."""

from fastapi import Request

from picklink.services import PickLinker


def get_linker(request: Request) -> PickLinker:
    """The PickLinker created at app startup."""
    return request.app.state.linker
