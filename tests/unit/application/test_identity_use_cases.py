"""
Name: Identity Use Case Tests

Responsibilities:
  - Registration per role (validation, admin secret gate, uniqueness)
  - Login non-disclosure (unknown email vs wrong password)
"""

from unittest.mock import Mock, patch

import pytest

from freshora.application.usecases.identity import (
    IdentityErrorCode,
    LoginUserUseCase,
    RegisterUserUseCase,
)
from freshora.crosscutting.exceptions import DuplicateRecordError
from freshora.identity.registration import parse_registration
from freshora.identity.tokens import decode_access_token
from freshora.identity.users import UserRole
from freshora.infrastructure.repositories import InMemoryUserRepository

pytestmark = pytest.mark.unit

ADMIN_SECRET = "s3cret-admin"


def _register_use_case(users=None) -> RegisterUserUseCase:
    return RegisterUserUseCase(
        users=users or InMemoryUserRepository(), admin_secret=ADMIN_SECRET
    )


def _payload(**overrides) -> dict:
    data = {
        "role": "customer",
        "name": "Ana",
        "email": "ana@test.com",
        "password": "secret1",
    }
    data.update(overrides)
    return data


# ============================================================================
# Register
# ============================================================================


def test_register_customer_issues_token_and_landing():
    users = InMemoryUserRepository()

    result = _register_use_case(users).execute(parse_registration(_payload()))

    assert result.error is None
    assert result.user.role is UserRole.CUSTOMER
    assert result.landing_route == "/"
    assert result.user.password_hash != "secret1"
    assert decode_access_token(result.access_token).role is UserRole.CUSTOMER
    assert users.count_users() == 1


def test_admin_with_wrong_secret_is_forbidden_and_not_persisted():
    users = InMemoryUserRepository()
    use_case = _register_use_case(users)

    wrong = use_case.execute(
        parse_registration(_payload(role="admin", adminSecret="nope"))
    )

    assert wrong.error.code == IdentityErrorCode.FORBIDDEN
    assert wrong.access_token is None
    assert users.get_user_by_email("ana@test.com") is None

    right = use_case.execute(
        parse_registration(_payload(role="admin", adminSecret=ADMIN_SECRET))
    )

    assert right.error is None
    assert right.user.role is UserRole.ADMIN
    assert right.landing_route == "/admin/dashboard"


def test_admin_secret_checked_before_any_store_access():
    users = Mock()

    result = _register_use_case(users).execute(
        parse_registration(_payload(role="admin", adminSecret="nope"))
    )

    assert result.error.code == IdentityErrorCode.FORBIDDEN
    users.create_user.assert_not_called()
    users.get_user_by_email.assert_not_called()


@pytest.mark.parametrize("secret_field", [{}, {"adminSecret": ""}])
def test_admin_without_secret_is_forbidden(secret_field):
    users = Mock()

    result = _register_use_case(users).execute(
        parse_registration(_payload(role="admin", **secret_field))
    )

    assert result.error.code == IdentityErrorCode.FORBIDDEN
    assert result.access_token is None
    users.get_user_by_email.assert_not_called()
    users.create_user.assert_not_called()


def test_seller_requires_store_name():
    users = InMemoryUserRepository()

    result = _register_use_case(users).execute(
        parse_registration(_payload(role="seller", storeName="   "))
    )

    assert result.error.code == IdentityErrorCode.VALIDATION_ERROR
    assert users.count_users() == 0


def test_seller_registration_keeps_store_name():
    result = _register_use_case().execute(
        parse_registration(_payload(role="seller", storeName="Fresh Farm"))
    )

    assert result.error is None
    assert result.user.store_name == "Fresh Farm"
    assert result.landing_route == "/seller/dashboard"


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": ""},
        {"email": ""},
        {"password": ""},
        {"password": "12345"},
        {"email": "not-an-email"},
    ],
)
def test_invalid_fields_are_validation_errors(overrides):
    result = _register_use_case().execute(parse_registration(_payload(**overrides)))

    assert result.error.code == IdentityErrorCode.VALIDATION_ERROR
    assert result.access_token is None


def test_duplicate_email_is_validation_error():
    use_case = _register_use_case()
    use_case.execute(parse_registration(_payload()))

    again = use_case.execute(parse_registration(_payload(email="ANA@test.com")))

    assert again.error.code == IdentityErrorCode.VALIDATION_ERROR


def test_store_uniqueness_violation_is_validation_error():
    users = Mock()
    users.get_user_by_email.return_value = None
    users.create_user.side_effect = DuplicateRecordError("dup", field="email")

    result = _register_use_case(users).execute(parse_registration(_payload()))

    assert result.error.code == IdentityErrorCode.VALIDATION_ERROR


# ============================================================================
# Login
# ============================================================================


def _seeded_users() -> InMemoryUserRepository:
    users = InMemoryUserRepository()
    _register_use_case(users).execute(
        parse_registration(_payload(email="x@test.com", password="right-pass"))
    )
    return users


def test_login_ok():
    result = LoginUserUseCase(_seeded_users()).execute("X@test.com ", "right-pass")

    assert result.error is None
    assert result.access_token
    assert result.user.email == "x@test.com"


def test_wrong_password_and_unknown_email_are_indistinguishable():
    use_case = LoginUserUseCase(_seeded_users())

    wrong_password = use_case.execute("x@test.com", "wrong")
    unknown_email = use_case.execute("nobody@test.com", "wrong")

    assert wrong_password.error == unknown_email.error
    assert wrong_password.error.code == IdentityErrorCode.INVALID_CREDENTIALS
    assert wrong_password.access_token is None
    assert unknown_email.access_token is None


def test_unknown_email_still_runs_password_check():
    use_case = LoginUserUseCase(InMemoryUserRepository())

    with patch(
        "freshora.application.usecases.identity.login_user.burn_password_check"
    ) as burn:
        use_case.execute("ghost@test.com", "whatever")

    burn.assert_called_once_with("whatever")
