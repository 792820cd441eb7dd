"""AT Protocol adapters.

Import modules directly:
    from annos.infrastructure.atproto.di import AtprotoProvider
    from annos.infrastructure.atproto.publisher import AtprotoAnnotationsFromTemplatePublisher
"""

__all__: list[str] = []
