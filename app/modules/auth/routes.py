from fastapi import APIRouter, Depends, HTTPException, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse,
    SetSuperUserRequest, CurrentUser
)
from app.modules.auth.service import AuthService
from app.core.dependencies import get_auth_service, get_current_user

router = APIRouter(prefix="/auth", tags=["auth"])

# Security scheme for JWT Bearer token
security = HTTPBearer()


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=CurrentUser)
async def get_me(current_user: CurrentUser = Depends(get_current_user)):
    """Get current authenticated user, including the superuser flag (for frontend UI)."""
    return current_user


@router.post("/set-super-user", status_code=200)
async def set_super_user(
    request: SetSuperUserRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service)
):
    """Set super_user status for a user (requires current user to be super_user)"""
    if not current_user.is_superuser:
        raise HTTPException(status_code=403, detail="Only super users can set super_user status")

    service.set_super_user(request.user_id, request.is_super_user)
    return {
        "message": f"User {request.user_id} super_user status set to {request.is_super_user}",
        "user_id": request.user_id,
        "is_super_user": request.is_super_user
    }
