"""
Session Token Service

Issues and validates the two bearer tokens of a session and frames them
as cookies.

- access token: sub, iat, exp (15 min), roles, authorities
- refresh token: sub, iat, exp (7 days), tokenId (id of a RefreshToken row)

Each kind is signed with its own HMAC secret, so neither kind validates
as the other. Access tokens are self-contained and cannot be revoked
before they expire; refresh tokens are only valid while their row exists
and is unexpired.
"""

import base64
import binascii
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any, Callable, Dict, Optional
from uuid import UUID, uuid4

from fastapi import Request, Response
from jose import JWTError, jwt

from libs.result import Error, Result, Return
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.entities import ErrorCode, RefreshToken, TokenKind
from .dtos import AuthDetails

logger = logging.getLogger(__name__)

PRODUCTION_ENV = "production"

# HS256 needs at least a 256-bit key
MIN_SECRET_BYTES = 32

TOKEN_ID_CLAIM = "tokenId"

INVALID_TOKEN_ERROR = Error(ErrorCode.INVALID_TOKEN, "Invalid or expired token")


def _utc_clock() -> datetime:
    return datetime.now(UTC)


def _decode_secret(name: str, value: str) -> bytes:
    try:
        secret = base64.b64decode(value, validate=True)
    except (binascii.Error, TypeError) as exc:
        raise ValueError(f"{name} must be base64 encoded") from exc
    if len(secret) < MIN_SECRET_BYTES:
        raise ValueError(f"{name} must decode to at least {MIN_SECRET_BYTES} bytes")
    return secret


@dataclass(frozen=True)
class TokenSettings:
    """Signing keys, lifetimes and cookie framing for SessionTokenService"""

    access_secret: bytes
    refresh_secret: bytes
    algorithm: str = "HS256"
    access_token_ttl: timedelta = timedelta(minutes=15)
    refresh_token_ttl: timedelta = timedelta(days=7)
    environment: str = PRODUCTION_ENV
    access_cookie_name: str = "access_token"
    refresh_cookie_name: str = "refresh_token"
    clock: Callable[[], datetime] = field(default=_utc_clock, compare=False)

    def __post_init__(self):
        if self.access_secret == self.refresh_secret:
            raise ValueError("Access and refresh tokens must use different secrets")

    @property
    def is_production(self) -> bool:
        return self.environment == PRODUCTION_ENV

    @classmethod
    def from_config(cls, config) -> "TokenSettings":
        """
        Build settings from ApplicationConfig.

        Raises:
            ValueError: if key material is malformed, so startup fails fast
        """
        return cls(
            access_secret=_decode_secret("ACCESS_TOKEN_SECRET", config.ACCESS_TOKEN_SECRET),
            refresh_secret=_decode_secret("REFRESH_TOKEN_SECRET", config.REFRESH_TOKEN_SECRET),
            algorithm=config.JWT_ALGORITHM,
            access_token_ttl=timedelta(minutes=config.ACCESS_TOKEN_TTL_MINUTES),
            refresh_token_ttl=timedelta(days=config.REFRESH_TOKEN_TTL_DAYS),
            environment=config.ENVIRONMENT,
            access_cookie_name=config.ACCESS_COOKIE_NAME,
            refresh_cookie_name=config.REFRESH_COOKIE_NAME,
        )


class SessionTokenService:
    """
    Signs, verifies and frames session tokens.

    Validation failures of every flavour (bad signature, malformed token,
    expiry, missing claim, missing or expired row) surface as the same
    INVALID_TOKEN error; the reason is only logged.
    """

    def __init__(self, settings: TokenSettings, uow: Optional[UnitOfWork] = None):
        self.settings = settings
        self.uow = uow

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate_access_token(self, auth_details: AuthDetails) -> Result[str]:
        claims = self._base_claims(auth_details.user_id, self.settings.access_token_ttl)
        claims["roles"] = [str(role) for role in auth_details.roles]
        claims["authorities"] = [str(authority) for authority in auth_details.authorities]
        return self._encode(claims, TokenKind.access)

    def generate_refresh_token(
        self, token_id: UUID, auth_details: AuthDetails
    ) -> Result[str]:
        claims = self._base_claims(auth_details.user_id, self.settings.refresh_token_ttl)
        claims[TOKEN_ID_CLAIM] = str(token_id)
        return self._encode(claims, TokenKind.refresh)

    def _base_claims(self, user_id: UUID, ttl: timedelta) -> Dict[str, Any]:
        now = self.settings.clock()
        return {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            # Fractional NumericDate keeps sub-second expiry exact
            "exp": (now + ttl).timestamp(),
        }

    def _encode(self, claims: Dict[str, Any], kind: TokenKind) -> Result[str]:
        try:
            token = jwt.encode(claims, self._secret(kind), algorithm=self.settings.algorithm)
        except JWTError as exc:
            logger.error(f"Failed to sign {kind.value} token: {exc}")
            return Return.err(
                Error(ErrorCode.TOKEN_GENERATION_FAILED, f"Failed to generate {kind.value} token")
            )
        return Return.ok(token)

    def _secret(self, kind: TokenKind) -> bytes:
        if kind == TokenKind.refresh:
            return self.settings.refresh_secret
        return self.settings.access_secret

    # ------------------------------------------------------------------
    # Sessions and cookies
    # ------------------------------------------------------------------

    async def start_session(
        self, response: Response, auth_details: AuthDetails
    ) -> Result[UUID]:
        """
        Create a new RefreshToken row and write both auth cookies.

        Returns:
            Result with the id of the new RefreshToken row
        """
        token_id = uuid4()
        expiry_date = self._naive_now() + self.settings.refresh_token_ttl
        await self.uow.refresh_tokens.create(token_id, auth_details.user_id, expiry_date)

        cookies_result = self.set_auth_cookies(response, auth_details, token_id)
        if cookies_result.is_err():
            return Return.err(cookies_result.error)

        return Return.ok(token_id)

    def set_auth_cookies(
        self, response: Response, auth_details: AuthDetails, token_id: UUID
    ) -> Result[None]:
        access_token = self.generate_access_token(auth_details)
        if access_token.is_err():
            return Return.err(access_token.error)

        refresh_token = self.generate_refresh_token(token_id, auth_details)
        if refresh_token.is_err():
            return Return.err(refresh_token.error)

        self._write_cookie(
            response,
            self.settings.access_cookie_name,
            access_token.value,
            self.settings.access_token_ttl,
        )
        self._write_cookie(
            response,
            self.settings.refresh_cookie_name,
            refresh_token.value,
            self.settings.refresh_token_ttl,
        )
        logger.info(f"Auth cookies set for user id: {auth_details.user_id}")
        return Return.ok(None)

    def clear_auth_cookies(self, response: Response) -> None:
        self._write_cookie(response, self.settings.access_cookie_name, "", timedelta(0))
        self._write_cookie(response, self.settings.refresh_cookie_name, "", timedelta(0))
        logger.info("Auth cookies were cleared")

    def _write_cookie(
        self, response: Response, name: str, value: str, max_age: timedelta
    ) -> None:
        secure = self.settings.is_production
        response.set_cookie(
            key=name,
            value=value,
            max_age=int(max_age.total_seconds()),
            path="/",
            secure=secure,
            httponly=True,
            samesite="none" if secure else "lax",
        )

    def extract_access_token(self, request: Request) -> Optional[str]:
        return request.cookies.get(self.settings.access_cookie_name)

    def extract_refresh_token(self, request: Request) -> Optional[str]:
        return request.cookies.get(self.settings.refresh_cookie_name)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_access_token(self, token: str) -> Result[Dict[str, Any]]:
        """Verify signature and expiry of an access token; returns its claims"""
        return self._decode(token, TokenKind.access)

    async def validate_refresh_token(self, token: str) -> Result[RefreshToken]:
        """
        Verify a refresh token and the RefreshToken row it is bound to.

        Side effects:
            - row missing: every refresh token of the subject is deleted
              (the token id was forged or already used)
            - row expired: that row is deleted
        """
        claims_result = self._decode(token, TokenKind.refresh)
        if claims_result.is_err():
            return Return.err(claims_result.error)

        claims = claims_result.value
        try:
            user_id = UUID(claims["sub"])
            token_id = UUID(claims[TOKEN_ID_CLAIM])
        except (KeyError, TypeError, ValueError):
            logger.warning("Refresh token is missing subject or token id")
            return Return.err(INVALID_TOKEN_ERROR)

        refresh_token = await self.uow.refresh_tokens.get_by_id_and_user_id(token_id, user_id)

        if refresh_token is None:
            revoked = await self.uow.refresh_tokens.delete_by_user_id(user_id)
            logger.warning(
                f"Unknown refresh token [id: {token_id}] presented for user {user_id}; "
                f"revoked {revoked} session(s)"
            )
            return Return.err(INVALID_TOKEN_ERROR)

        if refresh_token.expiry_date < self._naive_now():
            await self.uow.refresh_tokens.delete_by_id(token_id)
            logger.info(f"Refresh token [id: {token_id}] has expired and was deleted")
            return Return.err(INVALID_TOKEN_ERROR)

        return Return.ok(refresh_token)

    def extract_user_id(self, token: str, kind: TokenKind) -> Result[UUID]:
        return self._extract_uuid_claim(token, kind, "sub")

    def extract_refresh_token_id(self, token: str) -> Result[UUID]:
        return self._extract_uuid_claim(token, TokenKind.refresh, TOKEN_ID_CLAIM)

    def _extract_uuid_claim(self, token: str, kind: TokenKind, claim: str) -> Result[UUID]:
        claims_result = self._decode(token, kind)
        if claims_result.is_err():
            return Return.err(claims_result.error)
        try:
            return Return.ok(UUID(claims_result.value[claim]))
        except (KeyError, TypeError, ValueError):
            logger.warning(f"{kind.value} token has no valid '{claim}' claim")
            return Return.err(INVALID_TOKEN_ERROR)

    def _decode(self, token: str, kind: TokenKind) -> Result[Dict[str, Any]]:
        if not token:
            return Return.err(INVALID_TOKEN_ERROR)
        try:
            claims = jwt.decode(
                token,
                self._secret(kind),
                algorithms=[self.settings.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            logger.warning(f"{kind.value} token rejected: {exc}")
            return Return.err(INVALID_TOKEN_ERROR)

        # Millisecond-precise expiry against the injected clock
        try:
            expires_at = datetime.fromtimestamp(claims["exp"], UTC)
        except (KeyError, TypeError, ValueError, OverflowError):
            logger.warning(f"{kind.value} token has no valid expiry")
            return Return.err(INVALID_TOKEN_ERROR)
        if expires_at < self.settings.clock():
            logger.warning(f"{kind.value} token expired at {expires_at.isoformat()}")
            return Return.err(INVALID_TOKEN_ERROR)

        return Return.ok(claims)

    def _naive_now(self) -> datetime:
        return self.settings.clock().astimezone(UTC).replace(tzinfo=None)
