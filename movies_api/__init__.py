"""
Movies API — Application Package Initializer
==============================================

What: Marks the `movies_api` directory as a Python package.
Who:  Imported by uvicorn (`movies_api.main:app`), pytest, and the console script.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Store (MovieStore interface)   │  ← find / insert / update / delete
    ├─────────────────────────────────────┤
    │         Schemas (Pydantic)          │  ← JSON ↔ document conversion
    ├─────────────────────────────────────┤
    │        Database (MongoDB client)    │  ← one AsyncMongoClient per process
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
