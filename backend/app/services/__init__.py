# Services package init
"""
Notas Backend - Services Layer
===============================

Service Inventory:
    - AccessPolicy: opening-hours and note-cap rules (pure, clock injectable)
    - NoteService: count, list-all, create and delete-all on the Notas table

Both are stateless singletons; the database session is passed per call.
"""
