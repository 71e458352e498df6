"""Application layer: casos de uso y sesión de edición."""
