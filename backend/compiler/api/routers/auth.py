from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import or_, select
from compiler.api.deps import get_current_user, get_db
from compiler.db.models import User
from compiler.core.security import hash_password, verify_password, create_access_token
from compiler.schemas.auth import LoginIn, MeOut, RegisterIn, TokenOut, UserOut

router = APIRouter(prefix="/auth", tags=["auth"])


def _user_out(u: User) -> UserOut:
    return UserOut(id=u.id, username=u.username, email=u.email)


@router.post("/register", response_model=TokenOut, status_code=201)
async def register(payload: RegisterIn, db: AsyncSession = Depends(get_db)):
    email = payload.email.strip().lower()
    username = payload.username.strip()
    exists = await db.execute(
        select(User).where(or_(User.email == email, User.username == username))
    )
    if exists.scalars().first():
        raise HTTPException(400, "Email or username already in use")
    u = User(
        username=username, email=email, password_hash=hash_password(payload.password)
    )
    db.add(u)
    await db.commit()
    await db.refresh(u)
    return TokenOut(token=create_access_token(u.id), user=_user_out(u))


@router.post("/login", response_model=TokenOut)
async def login(payload: LoginIn, db: AsyncSession = Depends(get_db)):
    res = await db.execute(select(User).where(User.email == payload.email.strip().lower()))
    u = res.scalar_one_or_none()
    if not u or not verify_password(payload.password, u.password_hash):
        raise HTTPException(401, "Invalid credentials")
    return TokenOut(token=create_access_token(u.id), user=_user_out(u))


@router.get("/me", response_model=MeOut)
async def me(user=Depends(get_current_user)):
    return MeOut(user=_user_out(user))
