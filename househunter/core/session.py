from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SessionClaims:
    email: str
    role: Optional[str]
    issued_at: Optional[int]
    expires_at: int

    def to_claims(self) -> dict:
        """Identity part only, as fed back into TokenCodec.sign."""
        return {"email": self.email, "role": self.role}

    def to_dict(self) -> dict:
        return {
            "email": self.email,
            "role": self.role,
            "iat": self.issued_at,
            "exp": self.expires_at,
        }
