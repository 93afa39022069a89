"""
Profile Search Module

Components:
- store.py: Reads requester and candidate profiles from PostgreSQL
- search.py: Filter → order → paginate over the matching layer
- router.py: GET /api/v1/profiles/search
"""
