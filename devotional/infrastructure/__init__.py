"""Couche infrastructure : persistance SQLModel du store de contenu."""
