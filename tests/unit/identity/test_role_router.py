"""
Name: Client Role Router Tests

Responsibilities:
  - Landing route per role
  - Route guarding: public, authenticated, role subtrees, unknown paths
  - Unauthenticated redirect delegated to the injected redirector
"""

from unittest.mock import Mock
from uuid import uuid4

import pytest

from freshora.identity.role_router import (
    ADMIN_DASHBOARD_PATH,
    HOME_PATH,
    SELLER_DASHBOARD_PATH,
    QueryStringLoginRedirector,
    RouteAccess,
    find_route,
    guard_route,
    resolve_landing_route,
)
from freshora.identity.users import Identity, UserRole

pytestmark = pytest.mark.unit


def _identity(role: UserRole) -> Identity:
    return Identity(user_id=uuid4(), email=f"{role.value}@test.com", role=role)


@pytest.mark.parametrize(
    "role, expected",
    [
        (UserRole.SELLER, SELLER_DASHBOARD_PATH),
        (UserRole.ADMIN, ADMIN_DASHBOARD_PATH),
        (UserRole.CUSTOMER, HOME_PATH),
        (None, HOME_PATH),
    ],
)
def test_resolve_landing_route(role, expected):
    assert resolve_landing_route(role) == expected


def test_find_route_resolves_children_to_parent_access():
    node, path = find_route("/seller/inventory/")

    assert path == "/seller/inventory"
    assert node.access is RouteAccess.SELLER
    assert find_route("/seller/unknown") is None


@pytest.mark.parametrize("path", ["/", "/products", "/cart", "/login"])
def test_public_routes_allowed_for_anyone(path):
    redirector = Mock()

    assert guard_route(path, None, redirector).allowed
    redirector.to_login.assert_not_called()


def test_protected_route_without_identity_delegates_to_redirector():
    redirector = Mock()
    redirector.to_login.return_value = "/custom-login"

    decision = guard_route("/checkout", None, redirector)

    assert not decision.allowed
    assert decision.redirect_to == "/custom-login"
    redirector.to_login.assert_called_once_with("/checkout")


def test_default_redirector_keeps_requested_path():
    decision = guard_route("/orders", None, QueryStringLoginRedirector())

    assert decision.redirect_to == "/login?next=/orders"


def test_seller_subtree_rejects_other_roles_to_their_landing():
    redirector = Mock()

    customer = guard_route("/seller/products", _identity(UserRole.CUSTOMER), redirector)
    admin = guard_route("/seller/products", _identity(UserRole.ADMIN), redirector)
    seller = guard_route("/seller/products", _identity(UserRole.SELLER), redirector)

    assert customer.redirect_to == HOME_PATH
    assert admin.redirect_to == ADMIN_DASHBOARD_PATH
    assert seller.allowed
    redirector.to_login.assert_not_called()


def test_admin_subtree_is_admin_only():
    redirector = Mock()

    assert guard_route("/admin/users", _identity(UserRole.ADMIN), redirector).allowed
    seller = guard_route("/admin/dashboard", _identity(UserRole.SELLER), redirector)
    assert seller.redirect_to == SELLER_DASHBOARD_PATH


@pytest.mark.parametrize("role", list(UserRole))
def test_authenticated_routes_allow_every_role(role):
    assert guard_route("/profile/edit", _identity(role), Mock()).allowed


def test_unknown_route_goes_to_landing():
    decision = guard_route("/nope", _identity(UserRole.SELLER), Mock())

    assert not decision.allowed
    assert decision.redirect_to == SELLER_DASHBOARD_PATH
