"""
Entity Base Model

Base class for every entity stored through the generic repositories.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Entity(BaseModel):
    """Entity with an integer identity assigned by the repository on create."""

    id: Optional[int] = Field(None, description="Entity ID")

    model_config = ConfigDict(from_attributes=True)
