from typing import Optional
from jose import jwt, JWTError
from interview_engine.core.config import SECRET_KEY, ALGORITHM


def decode_owner_id(token: str) -> Optional[str]:
    """Return the `sub` claim of a valid token, or None."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    sub = payload.get("sub")
    return str(sub) if sub is not None else None
