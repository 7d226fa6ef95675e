"""Transport and collector configuration."""

from typing import Final


class TransportConfig:
    """Collector delivery configuration."""

    DEFAULT_API_URL: Final[str] = "https://3.111.33.111.nip.io"
    INGEST_PATH: Final[str] = "/api/ingest"
    REQUEST_TIMEOUT_SECONDS: Final[float] = 5.0
    FLUSH_TIMEOUT_MS: Final[int] = 5000
    # Wait used by the uncaught-exception hook before the process exits
    HOOK_FLUSH_TIMEOUT_MS: Final[int] = 200
    ALLOWED_SCHEMES: Final[frozenset] = frozenset({"http", "https"})
