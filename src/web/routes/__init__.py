"""Routes JSON de l'API EpiSync."""
