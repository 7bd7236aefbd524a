# Services package init
"""
Foodies Backend — Services Layer
==================================

What:  Business logic between routes (HTTP) and the store (persistence).

Service Inventory:
    - slugs.slugify:              title → URL-safe slug
    - sanitizer.sanitize_text:    escapes markup in free text
    - file_service.ImageService:  image validation and storage
    - listing_cache.ListingCache: cached listing payload, invalidated on share
    - meal_service.MealService:   share / list / get workflows
"""
