# Routes package init
"""
Movies API — API Routes Package
=================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - movies.py:  GET    /movies
                  GET    /movies/{id}
                  POST   /movies
                  PUT    /movies/{id}
                  DELETE /movies/{id}
    - health.py:  GET    /health

Routes stay thin: decode the request, make one storage accessor call,
return the result. Error responses come from the global handlers in main.py.
"""
