# (c) Copyright Datacraft, 2026
"""Users: principals with direct policies, group memberships and roles."""
