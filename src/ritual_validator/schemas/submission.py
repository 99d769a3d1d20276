"""Ingress-side submission schema."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

BioregionId = Literal["tech-haven", "mythic-forest", "isolated-bastion"]


class RitualPermissions(BaseModel):
    cultural_consultation: bool = False
    community_approval: bool = False
    expert_review: bool = False


class RitualSubmission(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    bioregion_id: BioregionId
    description: str = Field(min_length=10, max_length=500)
    cultural_context: str = Field(min_length=20, max_length=1000)
    content: str = Field(min_length=100, max_length=10000)
    author: str = Field(min_length=1, max_length=100)
    cultural_references: list[str] = Field(default_factory=list)
    permissions: RitualPermissions = Field(default_factory=RitualPermissions)
