# Services package init
"""
NoteBox - Services Layer
=========================

Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - NoteService: note CRUD, input rules, store error translation
"""
