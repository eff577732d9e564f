# Middleware package init
"""
Voxboard Backend - Middleware Package
======================================

Middleware Chain:
    Request -> [Request ID] -> [Logging] -> [GZip] -> [CORS] -> Route Handler

    1. Request ID: accept or generate the correlation ID first so every
       later log line and error body can carry it
    2. Logging: one access line per request, with duration

    Responses travel back through the same chain in reverse, which is where
    X-Request-ID is attached and the status/duration are logged.
"""
