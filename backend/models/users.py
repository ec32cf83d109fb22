from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Identity(BaseModel):
    """Authenticated caller, as carried by the app token."""
    uid: str
    email: str = ""


class UsageRecord(BaseModel):
    date: str
    count: int = 0


class UserRecord(BaseModel):
    plan: str = "free"
    subscription_status: Optional[str] = None
    usage: Optional[UsageRecord] = None


class PlanLimits(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    plan: str
    used: int
    limit: Optional[int]
    resets_at: str
