"""
Infrastructure Services (Infrastructure Layer)

Facade del paquete `infrastructure.services`: re-exporta los adapters de
segmentación y las utilidades de retry para que el composition root importe
desde un único lugar.
"""

from .llm.fake_card_splitter import FakeCardSplitter  # noqa: F401
from .llm.google_card_splitter import GoogleCardSplitter  # noqa: F401
from .retry import (  # noqa: F401
    PERMANENT_HTTP_CODES,
    TRANSIENT_HTTP_CODES,
    create_retry_decorator,
    is_transient_error,
    no_retry,
)

__all__ = [
    "FakeCardSplitter",
    "GoogleCardSplitter",
    "PERMANENT_HTTP_CODES",
    "TRANSIENT_HTTP_CODES",
    "create_retry_decorator",
    "is_transient_error",
    "no_retry",
]
