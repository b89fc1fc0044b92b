# Middleware package init
"""
NoteBox - Middleware Package
=============================

Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation ID available to every log line of the request
    2. Logging: method, path, status and duration, tagged with that ID
"""
