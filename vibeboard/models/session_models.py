# vibeboard/models/session_models.py
from typing import Optional
from pydantic import BaseModel


class SessionUser(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None      # only present with the user-read-email scope


# Credential Bundle: the whole payload of the signed session token
class CredentialBundle(BaseModel):
    access_token: str
    refresh_token: str
    expires_at: int                  # Unix timestamp of access_token expiry
    user: SessionUser


# Response of https://accounts.spotify.com/api/token
class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    refresh_token: Optional[str] = None
    scope: Optional[str] = None
