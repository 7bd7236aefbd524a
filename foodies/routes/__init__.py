# Routes package init
"""
Foodies Backend — API Routes Package
======================================

Route Inventory:
    - meals.py:   GET  /meals              (listing, cached)
                  GET  /meals/{slug}       (single meal)
                  POST /meals/share        (share form → 303 /meals)
    - health.py:  GET  /health             (service health check)

Uploaded images are served by the /images static mount registered in main.py.

Design Principle:
    Routes are THIN. They read the request, call MealService, and choose
    the status code. Validation, slugs, sanitizing and persistence live in
    the services and the store.
"""
