# (c) Copyright Datacraft, 2026
"""Authentication: login, role assumption and the request principal."""
