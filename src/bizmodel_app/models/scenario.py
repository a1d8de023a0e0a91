from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .inputs import ModelInputs


class StoredScenario(BaseModel):
    id: str
    name: str
    inputs: ModelInputs
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime = Field(..., description="Last rename or input change")
