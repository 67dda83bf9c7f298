from typing import Optional

from fastapi import Request

from househunter.core.errors import MissingToken

DEFAULT_TOKEN_HEADER = "Authorization"


def extract_token(request: Request, header_name: str = DEFAULT_TOKEN_HEADER) -> str:
    token: Optional[str] = request.headers.get(header_name)
    if token:
        token = token.strip()

    # clients that send "Bearer <token>" still get through
    if token and token[:7].lower() == "bearer ":
        token = token[7:].strip()

    if not token:
        raise MissingToken()

    return token
