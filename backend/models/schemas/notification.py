"""Notifications surfaced in the client's notification feed."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

NotificationType = Literal["skill_gap", "application", "system"]


class NewNotification(BaseModel):
    """A notification that has not been written to the store yet."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    user_id: str
    type: NotificationType
    title: str
    message: str
    read: bool = False


class Notification(NewNotification):
    """A stored notification. Only ``read`` ever changes, false to true."""

    id: str
    created_at: datetime
