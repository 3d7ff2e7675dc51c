"""
Authentication Routes

POST /auth/register - Register new user (student or business)
POST /auth/login - Login and get JWT token
GET /auth/me - Get current user info
"""

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy import text

from internmatch.db.postgres import get_db_session, execute_raw_sql
from internmatch.core.auth import hash_password, verify_password, create_access_token, get_current_user
from internmatch.schemas.schemas import (
    RegisterRequest, LoginRequest, TokenResponse, UserResponse, MessageResponse
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(request: RegisterRequest):
    """
    Register a new user account.

    After registration, login to get access token.
    """
    with get_db_session() as db:
        # Check email exists
        result = db.execute(
            text("SELECT id FROM users WHERE email = :email"),
            {"email": request.email}
        )
        if result.fetchone():
            raise HTTPException(status_code=400, detail="Email already registered")

        db.execute(
            text("""
                INSERT INTO users (name, email, password_hash, type)
                VALUES (:name, :email, :password_hash, :type)
            """),
            {
                "name": request.name,
                "email": request.email,
                "password_hash": hash_password(request.password),
                "type": request.type.value
            }
        )

    return MessageResponse(message=f"Registered successfully as {request.type.value}. Please login.")


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    rows = execute_raw_sql(
        "SELECT id, password_hash, type FROM users WHERE email = :email",
        {"email": request.email}
    )
    if not rows or not verify_password(request.password, rows[0]["password_hash"]):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    user = rows[0]
    token = create_access_token(data={"sub": str(user["id"]), "type": user["type"]})

    return TokenResponse(access_token=token, user_id=str(user["id"]), type=user["type"])


@router.get("/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_user)):
    """Get current authenticated user's info."""
    rows = execute_raw_sql(
        "SELECT id, name, email, type, created_at FROM users WHERE id = :id",
        {"id": user["user_id"]}
    )
    if not rows:
        raise HTTPException(status_code=404, detail="User not found")

    row = rows[0]
    return UserResponse(
        user_id=str(row["id"]), name=row["name"] or "", email=row["email"],
        type=row["type"], created_at=row.get("created_at")
    )
