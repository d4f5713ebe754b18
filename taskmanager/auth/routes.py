# =============================================================================
# Auth API Routes
# =============================================================================
#
# Endpoints:
#   POST /auth/register     - Create account (always role USER)
#   POST /auth/login        - Get a bearer token
#   GET  /auth/me           - Get current user
#
# =============================================================================

from fastapi import APIRouter, Depends
from pydantic import BaseModel, StrictStr

from taskmanager.api.deps import AppServices, get_services
from taskmanager.auth.context import AuthContext
from taskmanager.auth.identity import LoginResult
from taskmanager.auth.policies import require_auth
from taskmanager.core.models import UserSummary

router = APIRouter(prefix="/auth", tags=["auth"])


# =============================================================================
# Request/Response Models
# =============================================================================

# Fields are optional strict strings: core/validation.py owns the rules
# and reports every field problem in one response.

class RegisterRequest(BaseModel):
    username: StrictStr | None = None
    email: StrictStr | None = None
    password: StrictStr | None = None


class LoginRequest(BaseModel):
    username: StrictStr | None = None
    password: StrictStr | None = None


class RegisterResponse(BaseModel):
    success: bool = True
    message: str = "User registered successfully!"
    user: UserSummary


# =============================================================================
# Public Endpoints
# =============================================================================

@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    data: RegisterRequest,
    services: AppServices = Depends(get_services),
):
    """
    Create a new account.
    
    The response never contains the password or its hash.
    """
    user = await services.identity.register(data.username, data.email, data.password)
    return RegisterResponse(user=user)


@router.post("/login", response_model=LoginResult)
async def login(
    data: LoginRequest,
    services: AppServices = Depends(get_services),
):
    """
    Authenticate and get a token.
    
    Unknown username and wrong password give the same 401 response.
    """
    return await services.identity.login(data.username, data.password)


# =============================================================================
# Protected Endpoints
# =============================================================================

@router.get("/me", response_model=UserSummary)
async def get_current_user(
    ctx: AuthContext = Depends(require_auth),
    services: AppServices = Depends(get_services),
):
    """Get the current authenticated user."""
    return await services.user_service.me(ctx)
