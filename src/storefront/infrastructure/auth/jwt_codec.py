"""JWT implementation of the TokenCodec used by the identity gate."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from storefront.application.identity_gate import TokenCodec
from storefront.domain.exceptions import Unauthenticated
from storefront.domain.model.actor import Actor, Role


class JwtTokenCodec(TokenCodec):

    def __init__(self, secret: str, algorithm: str = "HS256", ttl_days: int = 7) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = timedelta(days=ttl_days)

    def issue(self, actor_id: str, role: Role) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": actor_id,
            "role": role.value,
            "iat": now,
            "exp": now + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> Actor:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "role", "exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise Unauthenticated("Session expired, login again") from exc
        except jwt.PyJWTError as exc:
            raise Unauthenticated("Invalid credential token") from exc

        try:
            role = Role(payload["role"])
        except ValueError as exc:
            raise Unauthenticated(f"Unknown role '{payload['role']}'") from exc
        return Actor(id=str(payload["sub"]), role=role)
