"""
Noteful API - Middleware Package
================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    The request id is assigned before the access log line is written, so
    every log entry of a request carries the same id.
"""
