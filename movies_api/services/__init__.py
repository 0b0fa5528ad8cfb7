# Services package init
"""
Movies API — Storage Layer
============================

What:  Storage accessors that sit between the routes (HTTP) and MongoDB.

Service Inventory:
    - MovieStore (abstract): find-all / find-by-id / insert / update / delete / ping
    - MongoMovieStore: concrete implementation over one MongoDB collection

Routes receive a MovieStore through FastAPI dependency injection, so the
concrete backend can be swapped (an in-memory store in tests) without
touching route code.
"""
