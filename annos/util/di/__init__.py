from annos.util.di.base import Provider
from annos.util.di.scope import Scope

__all__ = ["Provider", "Scope"]
