"""Adaptateur CLI (Typer + Rich) d'EpiSync."""
