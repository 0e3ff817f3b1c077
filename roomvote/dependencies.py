"""Request-scoped dependencies shared by the routers."""

from fastapi import Request

from roomvote.config import Settings
from roomvote.services.voting import client_address


def get_settings(request: Request) -> Settings:
    """Settings the running app was built with."""
    return request.app.state.settings


def get_client_address(request: Request) -> str:
    return client_address(request.headers)
