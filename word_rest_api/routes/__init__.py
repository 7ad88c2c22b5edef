"""
Word REST API: Routes Package
==============================

Route Inventory:
    - health.py:      GET /health, GET /health/ready
    - users.py:       /api/users[/{id}]
    - posts.py:       /api/posts[/{id}], ?user_id= filter
    - vocabulary.py:  /api/vocabulary[/{id}], /api/vocabulary/random

Handlers stay thin: parse, delegate to a repository, return. Validation lives
in the schemas, persistence and constraint translation in the repositories.
"""
