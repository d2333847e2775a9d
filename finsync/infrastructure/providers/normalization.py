"""Normalization helpers shared by provider mappers.

Provider payloads disagree on how they express money and time. These
helpers turn them into the canonical shapes: positive cent-quantized
Decimals, plain calendar dates in the provider's local offset, and stable
external ids when the provider does not send one.
"""

import hashlib
from collections import Counter
from datetime import UTC, date, datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal

from finsync.core.constants import SYNTHETIC_ID_HASH_LENGTH

CENT = Decimal("0.01")


def normalize_amount(value: Decimal) -> Decimal:
    """Absolute value quantized to cents (half-up)."""
    return abs(value).quantize(CENT, rounding=ROUND_HALF_UP)


def provider_timezone(utc_offset_hours: int) -> timezone:
    return timezone(timedelta(hours=utc_offset_hours))


def to_provider_date(value: datetime, utc_offset_hours: int) -> date:
    """Calendar date of an instant as seen in the provider's local offset.

    Naive datetimes are taken as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(provider_timezone(utc_offset_hours)).date()


def epoch_millis_to_date(millis: int, utc_offset_hours: int) -> date:
    return to_provider_date(datetime.fromtimestamp(millis / 1000, tz=UTC), utc_offset_hours)


def date_to_epoch_millis(value: date, utc_offset_hours: int, *, end_of_day: bool = False) -> int:
    """Epoch milliseconds of the first (or last) millisecond of a local date."""
    start = datetime(value.year, value.month, value.day, tzinfo=provider_timezone(utc_offset_hours))
    if end_of_day:
        start += timedelta(days=1) - timedelta(milliseconds=1)
    return int(start.timestamp() * 1000)


class ExternalIdSynthesizer:
    """Derive deterministic external ids for records without a natural id.

    The id is a digest of the provider slug, the record content and how
    many identical records came before it in the same batch. The same
    upstream batch therefore always yields the same ids. Two distinct
    events with identical content are distinguished only by their order.

    One instance per mapped batch.

    Example:
        >>> synthesizer = ExternalIdSynthesizer("open_finance")
        >>> synthesizer.synthesize("2024-11-05", "12.50", "expense", "Coffee")
        'open_finance-...'
    """

    def __init__(self, provider_slug: str) -> None:
        self._provider_slug = provider_slug
        self._occurrences: Counter[str] = Counter()

    def synthesize(self, *parts: str) -> str:
        content = "|".join(parts)
        occurrence = self._occurrences[content]
        self._occurrences[content] += 1
        digest = hashlib.sha256(
            f"{self._provider_slug}|{content}|{occurrence}".encode()
        ).hexdigest()
        return f"{self._provider_slug}-{digest[:SYNTHETIC_ID_HASH_LENGTH]}"
