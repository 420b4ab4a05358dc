"""Routes de l'API HTTP."""
