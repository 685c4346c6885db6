from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession
from eventquote.schemas.auth import RegisterIn, TokenOut, UserOut
from eventquote.models.user import User
from eventquote.db.session import get_db
from eventquote.core.security import create_access_token, hash_password, verify_password, get_current_user
from eventquote.core.enums import UserRole, AuditAction
from eventquote.core.audit_log import log_audit
from eventquote.core.response_builders import build_user_response

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=TokenOut)
async def register(payload: RegisterIn, db: AsyncSession = Depends(get_db)):
    email = payload.email.strip().lower()
    res = await db.execute(select(User).where(User.email == email))
    if res.scalars().first():
        raise HTTPException(status_code=400, detail="Email already registered")

    new_user = User(
        email=email,
        name=payload.name,
        password_hash=hash_password(payload.password),
        role=UserRole.QUOTER,
    )
    db.add(new_user)
    await db.flush()
    await log_audit(db, int(new_user.id), AuditAction.REGISTER, {"email": email})
    await db.commit()
    await db.refresh(new_user)

    token = create_access_token(str(new_user.id), new_user.role)
    return {"access_token": token}


@router.post("/login", response_model=TokenOut)
async def login(form_data: OAuth2PasswordRequestForm = Depends(), db: AsyncSession = Depends(get_db)):
    """The OAuth2 ``username`` field carries the account email."""
    email = form_data.username.strip().lower()
    res = await db.execute(select(User).where(User.email == email))
    user = res.scalars().first()
    if not user or not verify_password(form_data.password, user.password_hash):
        raise HTTPException(status_code=400, detail="Invalid credentials")

    await log_audit(db, int(user.id), AuditAction.LOGIN, {"email": email})
    await db.commit()

    token = create_access_token(str(user.id), user.role)
    return {"access_token": token}


@router.get("/me", response_model=UserOut)
async def me(current_user: User = Depends(get_current_user)):
    return build_user_response(current_user)
