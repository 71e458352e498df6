"""Crosscutting: configuración, logging y excepciones tipadas."""
