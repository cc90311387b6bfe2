"""
===============================================================================
APPLICATION LAYER (Public API / Exports)
===============================================================================

Expone los puntos de entrada estables de la capa de aplicación:
  - ensure_dev_seed: datos demo para desarrollo local

Nota:
  - Los casos de uso se importan desde `usecases/` subdirectories.
===============================================================================
"""

from .dev_seed_demo import ensure_dev_seed

__all__ = ["ensure_dev_seed"]
