from unittest.mock import patch, MagicMock

import pytest

from salary_tracker.app.data_access.data_service import DataServiceError
from salary_tracker.app.naming_conventions import DEFAULT_SALARY
from salary_tracker.app.services.auth_service import AuthService, AuthError, User


@pytest.fixture
def auth(data_client):
    return AuthService(data_client)


@pytest.fixture
def credentials(faker) -> tuple[str, str]:
    return faker.email(), faker.password(length=10)


def test_sign_up_creates_profile_without_signing_in(auth, credentials):
    email, password = credentials
    user = auth.sign_up(email, password)
    assert user.email == email.lower()
    assert not auth.has_session
    assert auth.profile_repo.get_salary(user.id) == DEFAULT_SALARY


def test_sign_up_twice(auth, credentials):
    auth.sign_up(*credentials)
    with pytest.raises(AuthError, match="User already registered"):
        auth.sign_up(*credentials)


def test_short_password_is_rejected(auth, faker):
    with pytest.raises(AuthError, match="at least 6 characters"):
        auth.sign_up(faker.email(), '12345')


def test_password_is_not_stored_in_plain_text(auth, credentials):
    email, password = credentials
    auth.sign_up(email, password)
    stored = auth.users_repo.get_user_by_email(email.lower())
    assert stored[auth.users_repo.password_col] != password


def test_sign_in(auth, credentials):
    email, password = credentials
    registered = auth.sign_up(email, password)
    user = auth.sign_in(f"  {email.upper()} ", password)
    assert user == registered
    assert auth.get_user() == user
    assert auth.has_session


@pytest.mark.parametrize('wrong', ['password', 'email'])
def test_sign_in_with_wrong_credentials(auth, credentials, wrong):
    email, password = credentials
    auth.sign_up(email, password)
    if wrong == 'password':
        password = password + 'x'
    else:
        email = 'x' + email
    with pytest.raises(AuthError, match="Invalid login credentials"):
        auth.sign_in(email, password)
    assert not auth.has_session


def test_missing_credentials(auth):
    with pytest.raises(AuthError):
        auth.sign_in('', '')


def test_service_failure_is_reported_as_auth_error(auth, credentials):
    with patch.object(auth.users_repo, 'get_user_by_email', side_effect=DataServiceError()):
        with pytest.raises(AuthError, match="unavailable"):
            auth.sign_in(*credentials)
    assert not auth.has_session


def test_session_change_events(auth, credentials):
    listener = MagicMock()
    unsubscribe = auth.on_auth_state_change(listener)
    auth.sign_up(*credentials)
    user = auth.sign_in(*credentials)
    listener.assert_called_once_with('SIGNED_IN', user)

    auth.sign_out()
    listener.assert_called_with('SIGNED_OUT', None)
    assert listener.call_count == 2
    assert auth.get_user() is None

    unsubscribe()
    auth.sign_in(*credentials)
    assert listener.call_count == 2


def test_sign_out_without_session_is_silent(auth):
    listener = MagicMock()
    auth.on_auth_state_change(listener)
    auth.sign_out()
    listener.assert_not_called()


def test_user_is_immutable():
    user = User(id='1', email='a@b.c')
    with pytest.raises(AttributeError):
        user.email = 'x@y.z'
