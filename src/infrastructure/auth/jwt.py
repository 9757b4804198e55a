"""Bearer token issuing and validation."""

from datetime import UTC, datetime, timedelta
from uuid import UUID

from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError

from src.domain.exceptions import UnauthenticatedException

BEARER_PREFIX = "bearer "


class TokenPayload(BaseModel):
    """JWT claims we rely on."""

    sub: UUID  # User ID
    exp: datetime
    iat: datetime
    iss: str | None = None


def get_bearer_token(authorization: str | None) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header.

    Args:
        authorization: Raw header value.

    Returns:
        The token string.

    Raises:
        UnauthenticatedException: If the header is missing or not a bearer token.
    """
    if not authorization:
        raise UnauthenticatedException("Missing Authorization header")
    if not authorization.lower().startswith(BEARER_PREFIX):
        raise UnauthenticatedException("Authorization header is not a bearer token")
    token = authorization[len(BEARER_PREFIX) :].strip()
    if not token:
        raise UnauthenticatedException("Empty bearer token")
    return token


class JWTAuthenticator:
    """Validates HS256 access tokens and resolves the caller's user ID."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        issuer: str | None = None,
    ) -> None:
        """Initialize the authenticator.

        Args:
            secret: Shared signing secret.
            algorithm: JWS algorithm.
            issuer: Expected ``iss`` claim, if any.
        """
        self._secret = secret
        self._algorithm = algorithm
        self._issuer = issuer

    def create_token(self, user_id: UUID, expires_in: timedelta) -> str:
        """Issue a signed access token for a user.

        Args:
            user_id: User UUID placed in ``sub``.
            expires_in: Token lifetime.

        Returns:
            Encoded JWT.
        """
        now = datetime.now(UTC)
        claims: dict[str, object] = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + expires_in,
        }
        if self._issuer:
            claims["iss"] = self._issuer
        return str(jwt.encode(claims, self._secret, algorithm=self._algorithm))

    def validate(self, token: str) -> UUID:
        """Validate a token and return the user ID it was issued for.

        Raises:
            UnauthenticatedException: If the token is invalid, expired or its
                subject is not a UUID.
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=self._issuer,
            )
            payload = TokenPayload(**claims)
        except JWTError as e:
            raise UnauthenticatedException(f"Invalid token: {e}") from e
        except ValidationError as e:
            raise UnauthenticatedException("Token claims are malformed") from e
        return payload.sub

    def authenticate(self, authorization: str | None) -> UUID:
        """Resolve the caller from a raw Authorization header."""
        return self.validate(get_bearer_token(authorization))
