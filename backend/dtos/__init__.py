"""
Data Transfer Objects (DTOs) Layer

DTOs decouple the HTTP contract from the ORM models.

Structure:
- request/: validated request bodies and query parameters
- response/: outgoing response shapes
- internal/: normalized commands passed from the API layer to services
"""
