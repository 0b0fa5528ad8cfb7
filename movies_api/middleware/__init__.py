# Middleware package init
"""
Movies API — Middleware Package
=================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: assign the correlation id first so every later log line has it
    2. Logging: one access line per request with status and duration
    3. CORS: FastAPI's CORSMiddleware (handles preflight)
"""
