from __future__ import annotations

from typing import Literal

ActionStatus = Literal["Open", "Doing", "Waiting", "Done", "Archived"]
ActionPriority = Literal["Low", "Medium", "High"]
VacationType = Literal["Grant", "Purchase", "Usage", "Adjustment"]
Theme = Literal["light", "dark", "system"]

STATUS_DONE = "Done"
STATUS_ARCHIVED = "Archived"
CLOSED_STATUSES = (STATUS_DONE, STATUS_ARCHIVED)
