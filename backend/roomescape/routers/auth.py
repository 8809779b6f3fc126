from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..deps import AUTH_COOKIE_NAME, get_auth_context, get_session
from ..domain.errors import AuthenticationError, MemberDuplicatedError, MemberNotFoundError
from ..infrastructure.repositories import SqlAlchemyMemberRepository
from ..schemas import LoginCheckResponse, LoginRequest, MemberCreate, MemberRead
from ..usecases import members as member_usecase
from ..utils.auth import AuthContext, create_access_token

router = APIRouter(tags=["auth"])


@router.post("/members", response_model=MemberRead, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: MemberCreate,
    session: AsyncSession = Depends(get_session),
) -> MemberRead:
    member_repo = SqlAlchemyMemberRepository(session)
    try:
        async with session.begin():
            member = await member_usecase.signup(
                member_repo,
                email=payload.email,
                password=payload.password,
                name=payload.name,
            )
            result = MemberRead(id=member.id, email=member.email, name=member.name, role=member.role)
    except (MemberDuplicatedError, IntegrityError):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="email already registered")
    return result


@router.post("/login", response_model=LoginCheckResponse)
async def login(
    payload: LoginRequest,
    response: Response,
    session: AsyncSession = Depends(get_session),
) -> LoginCheckResponse:
    member_repo = SqlAlchemyMemberRepository(session)
    try:
        member = await member_usecase.login(member_repo, email=payload.email, password=payload.password)
    except AuthenticationError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid email or password")

    settings = get_settings()
    lifetime = timedelta(minutes=settings.access_token_expire_minutes)
    token = create_access_token(
        member_id=member.id,
        role=member.role,
        secret=settings.auth_secret,
        algorithm=settings.auth_algorithm,
        expires_delta=lifetime,
    )
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        max_age=int(lifetime.total_seconds()),
        httponly=True,
        samesite="lax",
    )
    return LoginCheckResponse(name=member.name)


@router.get("/login/check", response_model=LoginCheckResponse)
async def check_login(
    session: AsyncSession = Depends(get_session),
    auth: AuthContext = Depends(get_auth_context),
) -> LoginCheckResponse:
    try:
        member = await member_usecase.get_member(SqlAlchemyMemberRepository(session), member_id=auth.member_id)
    except MemberNotFoundError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="member no longer exists")
    return LoginCheckResponse(name=member.name)


@router.post("/logout")
async def logout(response: Response) -> dict[str, str]:
    response.delete_cookie(key=AUTH_COOKIE_NAME, httponly=True, samesite="lax")
    return {"status": "ok"}
