"""
HeroVault Backend - Services Layer
===================================

What:  Validation and persistence logic between the routes and the store.

Service Inventory:
    - DocumentStore: single-record operations over one table
    - UploadService: multipart file → in-memory Attachment, size-capped
    - RecordService: generic create/read/update/delete facade
    - CharacterService, SuperheroService, ImageService: entity facades
"""
