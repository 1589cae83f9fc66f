# Routes package init
"""
Noteful Backend — API Routes Package
=====================================

Route Inventory:
    - notes.py:    /api/notes    (list/search, get, create, update, delete)
    - catalog.py:  /api/folders, /api/tags
    - health.py:   GET /health

Routes stay THIN: extract request data, call a service, shape the response.
"""
