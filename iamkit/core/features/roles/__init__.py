# (c) Copyright Datacraft, 2026
"""Roles: assumable policy bundles, possibly owned by another unit."""
