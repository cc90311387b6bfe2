"""
===============================================================================
TARJETA CRC — identity/token_codec.py
===============================================================================

Módulo:
    Token Codec (JWT HS256)

Responsabilidades:
    - Emitir tokens firmados {sub, iat, exp} para un username.
    - Parsear y verificar tokens devolviendo un resultado explícito
      (TokenVerification) en lugar de lanzar excepciones.
    - Clasificar fallas: MALFORMED / SIGNATURE_INVALID / EXPIRED.

Colaboradores:
    - PyJWT: encode/decode + verificación de firma.
    - crosscutting.config: jwt_secret / jwt_access_ttl_minutes (vía container).
    - identity/identity_filter.py: consume parse_and_verify().
    - application/usecases/auth: consume issue().

Decisiones:
    - Instancia inmutable, construida una vez por proceso (container.py).
    - `now` es inyectable: la expiración se evalúa contra ese instante
      (expirado si now >= exp), no contra el reloj del sistema.
    - Sin nonce/jti: mismos inputs + misma clave => mismo token.
    - Los clientes nunca ven el motivo de la falla; solo se loguea.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Final

import jwt

JWT_ALGORITHM: Final[str] = "HS256"

CLAIM_SUB: Final[str] = "sub"
CLAIM_IAT: Final[str] = "iat"
CLAIM_EXP: Final[str] = "exp"


class TokenFailureReason(str, Enum):
    MALFORMED = "MALFORMED"
    SIGNATURE_INVALID = "SIGNATURE_INVALID"
    EXPIRED = "EXPIRED"


@dataclass(frozen=True, slots=True)
class TokenVerification:
    """Resultado de parse_and_verify: subject XOR reason."""

    subject: str | None = None
    reason: TokenFailureReason | None = None

    @property
    def is_valid(self) -> bool:
        return self.subject is not None and self.reason is None

    @classmethod
    def ok(cls, subject: str) -> "TokenVerification":
        return cls(subject=subject)

    @classmethod
    def failed(cls, reason: TokenFailureReason) -> "TokenVerification":
        return cls(reason=reason)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec:
    """Emite y verifica access tokens con una clave HMAC fija."""

    __slots__ = ("_secret", "_default_ttl")

    def __init__(self, secret: str, default_ttl: timedelta):
        if not secret:
            raise ValueError("token signing secret must not be empty")
        if default_ttl.total_seconds() <= 0:
            raise ValueError("token ttl must be positive")
        self._secret = secret
        self._default_ttl = default_ttl

    @property
    def default_ttl(self) -> timedelta:
        return self._default_ttl

    def issue(
        self,
        subject: str,
        *,
        now: datetime | None = None,
        ttl: timedelta | None = None,
    ) -> str:
        issued_at = now or _utcnow()
        lifetime = self._default_ttl if ttl is None else ttl

        payload: dict[str, object] = {
            CLAIM_SUB: subject,
            # R: NumericDate con fracción; truncar adelantaría la expiración.
            CLAIM_IAT: issued_at.timestamp(),
            CLAIM_EXP: (issued_at + lifetime).timestamp(),
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def parse_and_verify(
        self, token: str, *, now: datetime | None = None
    ) -> TokenVerification:
        if not token or not isinstance(token, str):
            return TokenVerification.failed(TokenFailureReason.MALFORMED)

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={
                    "require": [CLAIM_SUB, CLAIM_EXP],
                    # R: exp/iat se evalúan abajo contra `now`.
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidSignatureError:
            return TokenVerification.failed(TokenFailureReason.SIGNATURE_INVALID)
        except jwt.InvalidTokenError:
            return TokenVerification.failed(TokenFailureReason.MALFORMED)

        subject = payload.get(CLAIM_SUB)
        expires_at = payload.get(CLAIM_EXP)
        if not isinstance(subject, str) or not subject:
            return TokenVerification.failed(TokenFailureReason.MALFORMED)
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            return TokenVerification.failed(TokenFailureReason.MALFORMED)

        current = (now or _utcnow()).timestamp()
        if current >= expires_at:
            return TokenVerification.failed(TokenFailureReason.EXPIRED)

        return TokenVerification.ok(subject)
