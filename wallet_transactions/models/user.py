"""Minimal user reference carried on confirmed transactions."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserRef(BaseModel):
    """Sender or recipient of a transaction, as reported by the wallet service."""
    
    model_config = ConfigDict(frozen=True, extra="ignore")
    
    id: Optional[str] = Field(None, description="User identifier")
    name: Optional[str] = Field(None, description="Display name")
    email: Optional[str] = Field(None, description="Email address")
