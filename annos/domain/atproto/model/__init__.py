"""AT Protocol value objects."""

from .value import DID, TID, ATUri, StrongRef

__all__ = [
    "ATUri",
    "DID",
    "StrongRef",
    "TID",
]
