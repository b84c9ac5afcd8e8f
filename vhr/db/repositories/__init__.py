"""
Per-domain repository modules for database access.

Every function takes the request-scoped `Session` first. Lookups hide
soft-deleted rows and return None when nothing matches; HTTP translation
happens in the routers.
"""
