# Services package init
"""
Noteful Backend — Services Layer
=================================

Service Inventory:
    - note_queries:    Query Layer; joined note/folder/tag rows and note writes
    - hydration:       Hydration Engine; folds joined rows into NoteResponse objects
    - note_service:    Orchestrates queries + hydration per notes endpoint
    - catalog_service: Folder and tag CRUD

Services receive the request's AsyncSession and never commit; the session
dependency in noteful.database owns the transaction.
"""
