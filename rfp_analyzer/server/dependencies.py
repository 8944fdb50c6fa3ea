from fastapi import Depends, HTTPException, Request, status

from rfp_analyzer.config.settings import Settings
from rfp_analyzer.logging.logger import Log
from rfp_analyzer.server.auth import InvalidTokenError, decode_owner_id
from rfp_analyzer.server.services import ServiceContainer


def get_services(request: Request) -> ServiceContainer:
    """Shared service container from app state."""
    return request.app.state.services


def get_settings(services: ServiceContainer = Depends(get_services)) -> Settings:
    return services.settings


def get_current_owner(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> str:
    """Owner id from the bearer token; 401 when absent or invalid."""
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        return decode_owner_id(token, settings.jwt_secret, settings.jwt_algorithm)
    except InvalidTokenError as exc:
        Log.warning("Rejected bearer token", error=str(exc))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token"
        ) from exc
