"""Lightweight JWT pre-check middleware.

Rejects malformed or undecodable bearer tokens early and attaches the decoded
claims to `request.state.auth`. Route-level dependencies (`get_current_user`
and the role guards) still enforce auth; requests without an Authorization
header pass straight through.
"""
from starlette.requests import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from app.core.security import decode_token


class JWTMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request.state.auth = None
        auth_header = request.headers.get("authorization")
        if not auth_header:
            return await call_next(request)

        scheme, _, token = auth_header.partition(" ")
        if scheme.lower() != "bearer" or not token:
            return JSONResponse(status_code=401, content={"detail": "Invalid authorization header"})

        payload = decode_token(token)
        if not payload:
            return JSONResponse(status_code=401, content={"detail": "Invalid token"})

        if not payload.get("sub"):
            return JSONResponse(status_code=401, content={"detail": "Invalid token payload"})

        request.state.auth = payload
        return await call_next(request)
