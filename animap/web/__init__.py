"""API HTTP FastAPI d'animap."""
