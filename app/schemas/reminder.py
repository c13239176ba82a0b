from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict


class ReminderCreate(BaseModel):
    prescription_item_id: int = Field(..., gt=0)
    notification_time: datetime
    message: Optional[str] = Field(None, max_length=500)


class ReminderStatusUpdate(BaseModel):
    status: str = Field(..., pattern="^(pending|sent|dismissed)$")


class ReminderRead(BaseModel):
    id: int
    patient_profile_id: int
    prescription_item_id: int
    notification_time: datetime
    message: Optional[str] = None
    status: str

    model_config = ConfigDict(from_attributes=True)
