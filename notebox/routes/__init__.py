# Routes package init
"""
NoteBox - API Routes Package
=============================

Route Inventory:
    - notes.py:   GET    /notes            (list, search, sort)
                  GET    /notes/{id}       (single note)
                  POST   /notes            (create)
                  PUT    /notes/{id}       (update)
                  DELETE /notes/{id}       (delete)
    - health.py:  GET    /health           (service health check)

Routes stay thin: extract parameters, call NoteService, set status codes and
headers. Business rules live in notebox.services.
"""
