# Middleware package init
"""
Foodies Backend — Middleware Package
======================================

Middleware Chain (outermost first):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route

    - Rate Limit first: throttles repeated share-form submissions per IP
      before any form parsing happens; reads are never limited
    - Request ID next: every later log line can carry the correlation ID
    - Logging: sees the final status code and total duration
"""
