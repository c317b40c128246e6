"""
Travel API — Middleware Package

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler
"""
