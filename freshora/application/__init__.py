"""Capa de aplicación: casos de uso (`usecases/`) y seed de cuentas demo."""

from .dev_seed_demo import ensure_dev_demo

__all__ = ["ensure_dev_demo"]
