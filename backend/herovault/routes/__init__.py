"""
HeroVault Backend - API Routes Package
=======================================

Route Inventory:
    - characters.py:  /api/ben            (multipart, image required on create)
    - superheroes.py: /api/superheroes    (JSON)
    - images.py:      /upload, /get-image (image gallery)
    - health.py:      /health

Routes stay thin: collect request data, call a service, wrap the result.
"""
