# (c) Copyright Datacraft, 2026
import logging
import os
from contextlib import asynccontextmanager
from logging.config import dictConfig
from pathlib import Path

import yaml
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from iamkit.core.config import get_settings
from iamkit.core.exceptions import (
	AuthorizationDenied, InvalidToken, RoleNotAssigned, ResourceNotFound,
)
from iamkit.core.features.auth.router import router as auth_router
from iamkit.core.features.groups.router import router as groups_router
from iamkit.core.features.organizations.router import router as organizations_router
from iamkit.core.features.policies.router import router as policies_router
from iamkit.core.features.roles.router import router as roles_router
from iamkit.core.features.units.router import router as units_router
from iamkit.core.features.users.router import router as users_router
from iamkit.core.version import __version__

logger = logging.getLogger(__name__)
config = get_settings()
prefix = config.api_prefix


def configure_logging() -> None:
	logging_config_path = os.environ.get("IAMKIT_LOGGING_CFG") or config.log_config
	if logging_config_path is None:
		return
	logging_config_path = Path(logging_config_path)

	if logging_config_path.exists() and logging_config_path.is_file():
		with open(logging_config_path, "r") as stream:
			logging_config = yaml.safe_load(stream)

		dictConfig(logging_config)


configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
	logger.info("Starting iamkit API server...")
	yield
	logger.info("Shutting down iamkit API server...")


app = FastAPI(
	title="iamkit REST API",
	version=__version__,
	lifespan=lifespan,
)

app.add_middleware(
	CORSMiddleware,
	allow_origins=["*"],
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)

for router in (
	auth_router,
	organizations_router,
	units_router,
	policies_router,
	groups_router,
	roles_router,
	users_router,
):
	app.include_router(router, prefix=prefix)


@app.exception_handler(AuthorizationDenied)
async def authorization_denied_handler(request: Request, exc: AuthorizationDenied):
	return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)})


@app.exception_handler(RoleNotAssigned)
async def role_not_assigned_handler(request: Request, exc: RoleNotAssigned):
	logger.warning(f"Refused assumption of role {exc.role_id}")
	return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)})


@app.exception_handler(ResourceNotFound)
async def resource_not_found_handler(request: Request, exc: ResourceNotFound):
	return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(InvalidToken)
async def invalid_token_handler(request: Request, exc: InvalidToken):
	return JSONResponse(
		status_code=status.HTTP_401_UNAUTHORIZED,
		content={"detail": str(exc)},
		headers={"WWW-Authenticate": "Bearer"},
	)
