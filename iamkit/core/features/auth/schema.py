# (c) Copyright Datacraft, 2026
from pydantic import BaseModel


class Token(BaseModel):
	access_token: str
	token_type: str = "bearer"
	expires_in: int = 3600


class TokenPayload(BaseModel):
	sub: str
	email: str
	unit: str
	organization: str
	roles: list[str] = []
	role_id: str | None = None
	exp: int
	iat: int


class Me(BaseModel):
	id: str
	email: str
	unit_id: str
	organization_id: str
	assumed_role_id: str | None = None
	roles: list[str] = []
	groups: list[str] = []
