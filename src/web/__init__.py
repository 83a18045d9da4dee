"""API web JSON (FastAPI) d'EpiSync."""
