from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field

from config import ObjectiveConfig


class SloReportRequest(BaseModel):
    objectives: Optional[List[ObjectiveConfig]] = None
    deadline_seconds: Optional[float] = Field(default=None, gt=0.0, le=600.0)
