"""
Cardsmith: texto crudo -> deck de tarjetas editables.

Capas:
  - crosscutting/: config, logging, excepciones
  - domain/: entidades, value objects, puertos, política del deck
  - infrastructure/: texto (markup, overflow, párrafos), prompts, adapters LLM
  - application/: casos de uso y sesión de edición
"""

__version__ = "0.1.0"
