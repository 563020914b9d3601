"""
===============================================================================
TARJETA CRC — freshora/context.py (Contexto por request)
===============================================================================

Responsabilidades:
  - Guardar request_id / method / path del request en curso (ContextVar,
    async-safe) para que cualquier log los incluya sin pasarlos a mano.

Colaboradores:
  - crosscutting.middleware: setea el contexto al entrar y lo limpia al salir.
  - crosscutting.logger: lo lee con get_context_dict().

Restricciones:
  - Solo strings; "" significa "no disponible" y no se emite.
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar

_FIELDS = ("request_id", "method", "path")

_vars: dict[str, ContextVar[str]] = {
    name: ContextVar(f"freshora_{name}", default="") for name in _FIELDS
}


def set_request_context(
    *, request_id: str = "", method: str = "", path: str = ""
) -> None:
    for name, value in zip(_FIELDS, (request_id, method, path)):
        _vars[name].set(value or "")


def get_context_dict() -> dict[str, str]:
    """Contexto actual, sin las claves vacías."""
    return {name: var.get() for name, var in _vars.items() if var.get()}


def clear_context() -> None:
    for var in _vars.values():
        var.set("")
