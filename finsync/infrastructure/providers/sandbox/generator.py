"""Sandbox transaction generator.

Produces plausible synthetic records when live data is unavailable or
disabled. Output is randomized but bounded by a SandboxProfile, and the
random source and clock are injectable so tests can pin the output.

Synthetic external ids have the form SANDBOX-<marker>-<timestamp_ms>-<index>.
They are unique per call and intentionally never stable across calls.
"""

import random
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from decimal import Decimal

import structlog

from finsync.core.constants import SANDBOX_EXTERNAL_ID_PREFIX
from finsync.domain.entities import CanonicalTransaction
from finsync.domain.value_objects import SyncWindow
from finsync.infrastructure.providers.sandbox.profiles import SandboxProfile

logger = structlog.get_logger(__name__)

CENTS = 100
CENT = Decimal("0.01")


class SandboxTransactionGenerator:
    """Generate synthetic canonical records for one provider.

    Example:
        >>> generator = SandboxTransactionGenerator(
        ...     OPEN_FINANCE_SANDBOX_PROFILE, rng=random.Random(7)
        ... )
        >>> records = generator.generate()
    """

    def __init__(
        self,
        profile: SandboxProfile,
        *,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._profile = profile
        self._rng = rng or random.Random()
        self._clock = clock or (lambda: datetime.now(UTC))

    @property
    def profile(self) -> SandboxProfile:
        return self._profile

    def effective_window(self, window: SyncWindow | None = None) -> SyncWindow:
        """Window synthetic dates are drawn from.

        The requested window is narrowed to the profile's recency window.
        Without a requested window, the recency window ends today.
        """
        if window is None:
            return SyncWindow.last_days(
                self._profile.window_days, today=self._clock().date()
            )
        return window.clamp_to_recent(self._profile.window_days)

    def generate(self, window: SyncWindow | None = None) -> list[CanonicalTransaction]:
        """Generate a non-empty batch of records, newest first.

        Args:
            window: Sync window the records should fall into.

        Returns:
            Between profile.min_records and profile.max_records records.
        """
        profile = self._profile
        effective = self.effective_window(window)
        count = self._rng.randint(profile.min_records, profile.max_records)
        timestamp_ms = int(self._clock().timestamp() * 1000)

        records: list[CanonicalTransaction] = []
        for index in range(count):
            template = self._rng.choice(profile.templates)
            low, high = profile.band_for(template.transaction_type)
            cents = self._rng.randint(int(low * CENTS), int(high * CENTS))
            days_back = self._rng.randint(0, effective.days - 1)

            records.append(
                CanonicalTransaction(
                    description=template.description,
                    amount=(Decimal(cents) / CENTS).quantize(CENT),
                    transaction_type=template.transaction_type,
                    source=profile.source_label,
                    transaction_date=effective.end_date - timedelta(days=days_back),
                    external_id=(
                        f"{SANDBOX_EXTERNAL_ID_PREFIX}{profile.marker}-{timestamp_ms}-{index}"
                    ),
                    category=template.category,
                )
            )

        records.sort(key=lambda record: record.transaction_date, reverse=True)
        logger.debug(
            "sandbox_transactions_generated",
            provider=profile.provider_slug,
            record_count=len(records),
            start_date=effective.start_date.isoformat(),
            end_date=effective.end_date.isoformat(),
        )
        return records
