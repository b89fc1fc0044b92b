"""
NoteBox - Application Package Initializer
==========================================

What:  Root package for the NoteBox notes manager.
Who:   Imported by uvicorn (`notebox.main:app`), pytest, and the client controller.

Architecture Note:
    Two loosely coupled halves live side by side:

    ┌─────────────────────────────────────┐
    │   Client (state controller + API)   │  ← In-memory notes, optimistic edits
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, store access
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Bootstrap + async sessions
    └─────────────────────────────────────┘

    The client only talks to the backend over HTTP (GET /notes); it never
    touches the database layer directly.
"""

__version__ = "1.0.0"
