from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class RecordModel:
    """Represent a credential-guarded short URL mapping.

    The shortcode doubles as the record's username. Only the target may change
    after creation, and only through a caller presenting the matching secret.

    Attributes:
        shortcode (str):
            Unique short identifier of the mapping (also its username).
        secret (str):
            Credential secret paired with the shortcode.
        target (str):
            The original long URL that the shortcode resolves to.
        created_at (datetime):
            Moment the record was created (timezone-aware, UTC).

    Example:
        >>> from datetime import datetime, UTC
        >>> record = RecordModel(
        ...     shortcode='ab12cd34',
        ...     secret='xy98zw76',
        ...     target='https://example.com/article/123',
        ...     created_at=datetime(2025, 10, 15, tzinfo=UTC),
        ... )
        >>> record.expired(datetime(2025, 10, 30, tzinfo=UTC), retention_seconds=604_800)
        True
    """

    shortcode: str
    secret: str
    target: str
    created_at: datetime

    def expired(self, now: datetime, retention_seconds: int) -> bool:
        """Check whether the record outlived the retention window

        A non-positive retention disables expiry altogether.

        Args:
            now (datetime):
                Reference moment of the check.
            retention_seconds (int):
                Maximum record age in seconds.

        Returns:
            bool: True if `now - created_at` is strictly greater than the retention.
        """
        if retention_seconds <= 0:
            return False
        return now - self.created_at > timedelta(seconds=retention_seconds)
