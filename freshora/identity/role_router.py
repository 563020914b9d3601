"""
===============================================================================
TARJETA CRC — identity/role_router.py (Router de roles del cliente)
===============================================================================

Responsabilidades:
    - resolve_landing_route(role): ruta inicial según rol
        seller -> /seller/dashboard, admin -> /admin/dashboard,
        customer (o sin rol) -> /
    - Describir el árbol de rutas del cliente web (públicas, autenticadas,
      subárbol de seller, subárbol de admin).
    - guard_route(path, identity, redirector): decidir si una navegación se
      permite, se manda al login o se reencamina a la landing del rol.

Colaboradores:
    - identity.users: Identity / UserRole.
    - LoginRedirector (puerto): construye la redirección al login; la decisión
      de "a dónde va un anónimo" pertenece al colaborador, no a este módulo.
    - api/auth_routes.py: devuelve redirect_to en login/registro.

Notas:
    - El match sobre UserRole es exhaustivo; un rol nuevo obliga a revisar acá.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol
from urllib.parse import quote

from .users import Identity, UserRole

HOME_PATH = "/"
LOGIN_PATH = "/login"
SELLER_DASHBOARD_PATH = "/seller/dashboard"
ADMIN_DASHBOARD_PATH = "/admin/dashboard"


def resolve_landing_route(role: UserRole | None) -> str:
    """Ruta inicial post-login para el rol dado."""
    match role:
        case UserRole.SELLER:
            return SELLER_DASHBOARD_PATH
        case UserRole.ADMIN:
            return ADMIN_DASHBOARD_PATH
        case UserRole.CUSTOMER | None:
            return HOME_PATH
    return HOME_PATH


class RouteAccess(str, Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    SELLER = "seller"
    ADMIN = "admin"


@dataclass(frozen=True, slots=True)
class RouteNode:
    path: str
    access: RouteAccess
    children: tuple[str, ...] = ()


# Árbol de rutas del cliente web. Los hijos heredan el acceso del padre.
CLIENT_ROUTES: tuple[RouteNode, ...] = (
    RouteNode("/", RouteAccess.PUBLIC),
    RouteNode("/products", RouteAccess.PUBLIC),
    RouteNode("/cart", RouteAccess.PUBLIC),
    RouteNode(LOGIN_PATH, RouteAccess.PUBLIC),
    RouteNode("/checkout", RouteAccess.AUTHENTICATED),
    RouteNode("/orders", RouteAccess.AUTHENTICATED),
    RouteNode("/dashboard", RouteAccess.AUTHENTICATED),
    RouteNode("/profile", RouteAccess.AUTHENTICATED, children=("edit",)),
    RouteNode("/admin", RouteAccess.ADMIN, children=("dashboard", "users")),
    RouteNode(
        "/seller",
        RouteAccess.SELLER,
        children=("dashboard", "products", "orders", "inventory"),
    ),
)


def _normalize(path: str) -> str:
    clean = "/" + (path or "").split("?", 1)[0].split("#", 1)[0].strip("/")
    return clean


def find_route(path: str) -> tuple[RouteNode, str] | None:
    """Devuelve (nodo, path_normalizado) o None si la ruta no existe."""
    target = _normalize(path)
    for node in CLIENT_ROUTES:
        if target == node.path:
            return node, target
        prefix = node.path.rstrip("/") + "/"
        for child in node.children:
            if target == prefix + child:
                return node, target
    return None


class LoginRedirector(Protocol):
    """Puerto: construye la redirección al login para un visitante anónimo."""

    def to_login(self, requested_path: str) -> str: ...


class QueryStringLoginRedirector:
    """Redirector por defecto: /login?next=<ruta pedida>."""

    def __init__(self, login_path: str = LOGIN_PATH) -> None:
        self._login_path = login_path

    def to_login(self, requested_path: str) -> str:
        return f"{self._login_path}?next={quote(requested_path, safe='/')}"


@dataclass(frozen=True, slots=True)
class RouteDecision:
    allowed: bool
    redirect_to: str | None = None


def _required_role(access: RouteAccess) -> UserRole | None:
    match access:
        case RouteAccess.SELLER:
            return UserRole.SELLER
        case RouteAccess.ADMIN:
            return UserRole.ADMIN
        case RouteAccess.PUBLIC | RouteAccess.AUTHENTICATED:
            return None
    return None


def guard_route(
    path: str,
    identity: Identity | None,
    redirector: LoginRedirector,
) -> RouteDecision:
    """
    Decide la navegación a `path`.

    - Ruta desconocida: se reencamina a la landing del rol (o home).
    - Pública: permitida siempre.
    - Protegida y sin identidad: el redirector decide la URL de login.
    - Subárbol de rol y rol distinto: landing del rol actual.
    """
    role = identity.role if identity else None
    found = find_route(path)
    if found is None:
        return RouteDecision(allowed=False, redirect_to=resolve_landing_route(role))

    node, normalized = found
    if node.access is RouteAccess.PUBLIC:
        return RouteDecision(allowed=True)

    if identity is None:
        return RouteDecision(allowed=False, redirect_to=redirector.to_login(normalized))

    required = _required_role(node.access)
    if required is not None and identity.role is not required:
        return RouteDecision(allowed=False, redirect_to=resolve_landing_route(role))

    return RouteDecision(allowed=True)
