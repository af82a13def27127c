# repository/identity.py - Identity port: bearer token -> verified caller uid
from abc import ABC, abstractmethod
from firebase_admin import auth
from utils.errors import Unauthenticated
import logging

logger = logging.getLogger(__name__)


class IdentityProvider(ABC):
    @abstractmethod
    def verify_token(self, token: str) -> str:
        """Return the uid the token was issued for or raise Unauthenticated"""

    @abstractmethod
    def delete_user(self, uid: str) -> None:
        ...


class FirebaseIdentityProvider(IdentityProvider):
    """Firebase Auth ID token verification"""

    def __init__(self, app=None, check_revoked: bool = True):
        self._app = app
        self._check_revoked = check_revoked

    def verify_token(self, token: str) -> str:
        try:
            decoded = auth.verify_id_token(token, app=self._app, check_revoked=self._check_revoked)
        except (auth.InvalidIdTokenError, auth.UserDisabledError) as e:
            # Expired and revoked tokens are subclasses of InvalidIdTokenError
            logger.warning(f"Rejected ID token: {type(e).__name__}")
            raise Unauthenticated("Unauthorized: Invalid or expired token")
        except ValueError:
            logger.warning("Rejected malformed ID token")
            raise Unauthenticated("Unauthorized: Invalid or expired token")
        return decoded["uid"]

    def delete_user(self, uid: str) -> None:
        try:
            auth.delete_user(uid, app=self._app)
        except auth.UserNotFoundError:
            logger.warning(f"Auth account {uid} already absent")
