# feedback/services/identity_service.py
from typing import Optional

from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from ..exceptions import ValidationError


class IdentityBinding:
    """
    Binds a visitor's self-chosen display name to a signed, client-held token.

    Nothing is stored server side. The token is site-wide (not per share),
    expires after `max_age` seconds, and any tampering makes it resolve to
    nothing. Names are neither unique nor checked against anything.
    """

    def __init__(self, secret_key: str, max_age: int, salt: str = "display-name"):
        self.max_age = max_age
        self._ts = URLSafeTimedSerializer(secret_key=secret_key, salt=salt)

    def bind(self, name: str) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Username is required.")
        return self._ts.dumps({"username": name})

    def resolve(self, token: Optional[str]) -> Optional[str]:
        if not token:
            return None
        try:
            data = self._ts.loads(token, max_age=self.max_age)
        except (BadSignature, SignatureExpired):
            return None
        username = data.get("username") if isinstance(data, dict) else None
        return username or None
