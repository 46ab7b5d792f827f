import logging
from dataclasses import dataclass
from typing import Callable, Literal

from werkzeug.security import generate_password_hash, check_password_hash

from salary_tracker.app.data_access.data_service import DataServiceClient, DataServiceError
from salary_tracker.app.data_access.users_repository import UsersRepository
from salary_tracker.app.data_access.profile_repository import ProfileRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

AuthEvent = Literal['SIGNED_IN', 'SIGNED_OUT']


class AuthError(Exception):
    """Raised when signing in or signing up fails"""
    def __init__(self, message="Authentication failed"):
        self.message = message
        super().__init__(self.message)


@dataclass(frozen=True)
class User:
    id: str
    email: str


class AuthService:
    def __init__(self, client: DataServiceClient):
        """
        Email and password authentication backed by the users table. Holds the session of a single browser session
        and notifies subscribers whenever it changes.

        Parameters
        ----------
        client : DataServiceClient
            The started data service client.
        """
        self.users_repo = UsersRepository(client)
        self.profile_repo = ProfileRepository(client)
        self.user: User | None = None
        self._listeners: list[Callable[[AuthEvent, User | None], None]] = []

    def get_user(self) -> User | None:
        return self.user

    @property
    def has_session(self) -> bool:
        return self.user is not None

    def on_auth_state_change(self, callback: Callable[[AuthEvent, User | None], None]) -> Callable[[], None]:
        """
        Subscribe to session changes.

        Parameters
        ----------
        callback : Callable
            Called with the event name and the signed in user (None after signing out).

        Returns
        -------
        Callable
            A function that removes the subscription.
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _set_user(self, event: AuthEvent, user: User | None) -> None:
        self.user = user
        for listener in list(self._listeners):
            listener(event, user)

    @staticmethod
    def _validate_credentials(email: str, password: str) -> str:
        email = (email or '').strip().lower()
        if not email or not password:
            raise AuthError("Please enter your email and password.")
        return email

    def sign_in(self, email: str, password: str) -> User:
        email = self._validate_credentials(email, password)
        try:
            stored = self.users_repo.get_user_by_email(email)
        except DataServiceError as e:
            logger.error("Sign in failed for %s", email, exc_info=True)
            raise AuthError("Authentication service is unavailable, please try again.") from e

        if stored is None or not check_password_hash(stored[self.users_repo.password_col], password):
            raise AuthError("Invalid login credentials")

        user = User(id=stored[self.users_repo.id_col], email=email)
        logger.info("User %s signed in", user.id)
        self._set_user('SIGNED_IN', user)
        return user

    def sign_up(self, email: str, password: str) -> User:
        """
        Register a new user and create its profile with the default salary. The new user still has to sign in.
        """
        email = self._validate_credentials(email, password)
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthError(f"Password should be at least {MIN_PASSWORD_LENGTH} characters.")
        try:
            if self.users_repo.get_user_by_email(email) is not None:
                raise AuthError("User already registered")
            created = self.users_repo.add_user(email, generate_password_hash(password))
            self.profile_repo.create_profile(created[self.users_repo.id_col])
        except DataServiceError as e:
            logger.error("Sign up failed for %s", email, exc_info=True)
            raise AuthError("Authentication service is unavailable, please try again.") from e

        logger.info("Registered user %s", created[self.users_repo.id_col])
        return User(id=created[self.users_repo.id_col], email=email)

    def sign_out(self) -> None:
        if self.user is None:
            return
        logger.info("User %s signed out", self.user.id)
        self._set_user('SIGNED_OUT', None)
