"""Operator endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...config.logging import get_logger, log_audit_event
from ...config.settings import get_settings
from ...seed import SeedSource, reseed
from ..exceptions import ConfigurationError, ValidationException, WatchdogException
from ..models.requests import ReseedRequest
from ..models.responses import ReseedResponse

logger = get_logger(__name__)

router = APIRouter()

# Security scheme for Bearer token authentication
security = HTTPBearer()


def verify_auth_token(
    credentials: HTTPAuthorizationCredentials = Security(security),
) -> str:
    """
    Verify the operator authentication token.

    Args:
        credentials: The HTTP authorization credentials

    Returns:
        The token if valid

    Raises:
        ConfigurationError: If no admin token is configured
        HTTPException: If token is invalid
    """
    expected_token = get_settings().admin_auth_token
    if not expected_token:
        logger.error("Admin auth token not configured")
        raise ConfigurationError("ADMIN_AUTH_TOKEN", "no token set")

    if credentials.credentials != expected_token:
        logger.warning(
            "Invalid authentication attempt",
            provided_token_length=len(credentials.credentials),
        )
        raise HTTPException(status_code=401, detail="Invalid authentication token")

    logger.debug("Authentication successful")
    return credentials.credentials


@router.post(
    "/admin/reseed",
    response_model=ReseedResponse,
    summary="Reseed Collections",
    description="Reload one collection, or all of them, from the bundled seed data",
)
def reseed_collections(
    payload: ReseedRequest,
    request: Request,
    token: str = Depends(verify_auth_token),
) -> ReseedResponse:
    """
    Reload seed data.

    - **source**: legislators, bills, spending, lobbying or all

    Reloading replaces rows by primary key, so repeating a request is harmless.
    """
    request_id = getattr(request.state, "request_id", None)

    try:
        source = SeedSource(payload.source.strip().lower())
    except ValueError:
        raise ValidationException(
            "Invalid data source", field_errors={"source": payload.source}
        ) from None

    log_audit_event("reseed_requested", actor="admin", source=source.value, request_id=request_id)
    result = reseed(source)

    if not result.success:
        raise WatchdogException(result.message, status_code=500, details=result.counts)

    return ReseedResponse(success=True, message=result.message, counts=result.counts)
