import asyncio
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional, Protocol

from config import Settings, logger
from exceptions import QuotaExceededException
from models.users import Identity, PlanLimits, UsageRecord, UserRecord


def today_utc(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%d")


def resets_at_iso(now: Optional[datetime] = None) -> str:
    """Next UTC midnight, when the daily counter starts over."""
    now = now or datetime.now(timezone.utc)
    tomorrow = (now + timedelta(days=1)).replace(hour=0, minute=0, second=0, microsecond=0)
    return tomorrow.isoformat().replace("+00:00", "Z")


class UserStore(Protocol):
    """Where plans and per-day usage live; owned outside the pipeline."""

    async def get(self, uid: str) -> UserRecord:
        ...

    async def save(self, uid: str, record: UserRecord) -> None:
        ...


class InMemoryUserStore:

    def __init__(self, users: Optional[Dict[str, UserRecord]] = None):
        self._users: Dict[str, UserRecord] = dict(users or {})

    async def get(self, uid: str) -> UserRecord:
        return self._users.get(uid, UserRecord()).model_copy(deep=True)

    async def save(self, uid: str, record: UserRecord) -> None:
        self._users[uid] = record.model_copy(deep=True)


class QuotaGate:
    """Daily free-tier counter checked before any model call is made."""

    def __init__(self, store: UserStore, settings: Settings, clock: Callable[[], datetime] = None):
        self.store = store
        self.limit = settings.FREE_DAILY_LIMIT
        self.upgrade_url = settings.UPGRADE_URL
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self._lock = asyncio.Lock()

    @staticmethod
    def is_pro(record: UserRecord) -> bool:
        return record.plan == "pro" and record.subscription_status in (None, "active")

    def _usage_for_today(self, record: UserRecord, today: str) -> UsageRecord:
        if record.usage is None or record.usage.date != today:
            return UsageRecord(date=today, count=0)
        return record.usage

    async def consume(self, identity: Identity) -> None:
        """Count one request against today's quota, or raise when it is used up."""
        async with self._lock:
            record = await self.store.get(identity.uid)
            if self.is_pro(record):
                return

            now = self.clock()
            usage = self._usage_for_today(record, today_utc(now))
            if usage.count >= self.limit:
                logger.info("Quota exhausted for user %s (%d/%d)", identity.uid, usage.count, self.limit)
                raise QuotaExceededException(self.upgrade_url, usage.count, self.limit, resets_at_iso(now))

            record.usage = UsageRecord(date=usage.date, count=usage.count + 1)
            await self.store.save(identity.uid, record)

    async def limits(self, identity: Identity) -> PlanLimits:
        record = await self.store.get(identity.uid)
        now = self.clock()
        usage = self._usage_for_today(record, today_utc(now))
        return PlanLimits(
            plan=record.plan,
            used=usage.count,
            limit=None if self.is_pro(record) else self.limit,
            resets_at=resets_at_iso(now),
        )
