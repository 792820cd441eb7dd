"""Custom Dishka scopes for annos."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """annos dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (config, engine, HTTP client)
    - UOW: Unit of Work (one command or query and its database session)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
