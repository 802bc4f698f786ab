"""
HeroVault Backend - Superhero Service
======================================

What:  Record facade for plain attribute records (/api/superheroes).
       No attachment.
"""

from herovault.schemas.superhero import SuperheroCreate, SuperheroResponse, SuperheroUpdate
from herovault.services.record_service import RecordService


class SuperheroService(RecordService[SuperheroResponse]):
    resource = "Superhero"
    create_schema = SuperheroCreate
    update_schema = SuperheroUpdate
    response_schema = SuperheroResponse
