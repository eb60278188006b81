"""
services - Collaborators the import engine talks to, sitting beside the DB layer.
"""

from services.denormalization import CategoryDenormalization   # noqa: F401
