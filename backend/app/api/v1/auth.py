import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordRequestForm

from app.core.config import settings
from app.core.deps import get_current_user
from app.core.limiter import limiter
from app.core.security import create_access_token, verify_password
from app.schemas.auth import Operator, Token

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=Token)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    form: OAuth2PasswordRequestForm = Depends(),
):
    if form.username.lower() != settings.OPERATOR_EMAIL.lower() or not verify_password(
        form.password, settings.OPERATOR_PASSWORD_HASH
    ):
        logger.info("Failed login for %s", form.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = create_access_token(subject=settings.OPERATOR_EMAIL, role=settings.OPERATOR_ROLE)
    logger.info(
        "Operator login from IP %s",
        request.client.host if request.client else "unknown",
    )
    return {"access_token": token, "token_type": "bearer"}


@router.get("/me", response_model=Operator)
async def me(current_user: Operator = Depends(get_current_user)):
    return current_user
