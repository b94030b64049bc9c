# (c) Copyright Datacraft, 2026
"""Units: tenant boundary of every resource, arranged in a tree per organization."""
