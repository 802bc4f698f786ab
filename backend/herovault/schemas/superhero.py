"""
HeroVault Backend - Superhero Schemas
======================================

What:  JSON request and response contracts for /api/superheroes.
       superheroName and originalName are required on create; every other
       attribute is optional free text.
"""

from typing import List, Optional

from herovault.schemas.common import CamelModel, NonEmptyStr, PatchStr, RecordResponse


class SuperheroCreate(CamelModel):
    superhero_name: NonEmptyStr
    original_name: NonEmptyStr
    abilities: Optional[str] = None
    weakness: Optional[str] = None
    backstory: Optional[str] = None
    reason: Optional[str] = None
    contributor: Optional[str] = None
    comment: Optional[str] = None


class SuperheroUpdate(CamelModel):
    superhero_name: PatchStr = None
    original_name: PatchStr = None
    abilities: Optional[str] = None
    weakness: Optional[str] = None
    backstory: Optional[str] = None
    reason: Optional[str] = None
    contributor: Optional[str] = None
    comment: Optional[str] = None


class SuperheroResponse(RecordResponse):
    superhero_name: str
    original_name: str
    abilities: Optional[str] = None
    weakness: Optional[str] = None
    backstory: Optional[str] = None
    reason: Optional[str] = None
    contributor: Optional[str] = None
    comment: Optional[str] = None

    @classmethod
    def from_record(cls, record) -> "SuperheroResponse":
        return cls(
            id=str(record.id),
            superhero_name=record.superhero_name,
            original_name=record.original_name,
            abilities=record.abilities,
            weakness=record.weakness,
            backstory=record.backstory,
            reason=record.reason,
            contributor=record.contributor,
            comment=record.comment,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class SuperheroEnvelope(CamelModel):
    message: str
    superhero: SuperheroResponse


class SuperheroListResponse(CamelModel):
    message: str = "Superheroes retrieved successfully"
    superheroes: List[SuperheroResponse]
