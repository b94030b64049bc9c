# (c) Copyright Datacraft, 2026
"""Groups: named sets of policies shared by their members."""
