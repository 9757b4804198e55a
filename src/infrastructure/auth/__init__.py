"""Authentication collaborators."""

from src.infrastructure.auth.jwt import JWTAuthenticator, TokenPayload, get_bearer_token

__all__ = [
    "JWTAuthenticator",
    "TokenPayload",
    "get_bearer_token",
]
