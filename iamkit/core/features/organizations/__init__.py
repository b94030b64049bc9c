# (c) Copyright Datacraft, 2026
"""Organizations: the top of the tenant hierarchy."""
