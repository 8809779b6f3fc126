from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import get_session, require_admin
from ..domain.errors import ThemeInUseError, ThemeNotFoundError
from ..infrastructure.repositories import SqlAlchemyReservationRepository, SqlAlchemyThemeRepository
from ..schemas import ThemeCreate, ThemeRead
from ..usecases import themes as theme_usecase

router = APIRouter(prefix="/themes", tags=["themes"])


@router.get("", response_model=List[ThemeRead])
async def list_themes(session: AsyncSession = Depends(get_session)) -> list[ThemeRead]:
    rows = await theme_usecase.get_themes(SqlAlchemyThemeRepository(session))
    return [ThemeRead.from_db(theme=theme) for theme in rows]


@router.get("/popular", response_model=List[ThemeRead])
async def list_popular_themes(
    days: int = Query(..., ge=1),
    limit: int = Query(..., ge=1),
    session: AsyncSession = Depends(get_session),
) -> list[ThemeRead]:
    rows = await theme_usecase.get_popular_themes(SqlAlchemyThemeRepository(session), days=days, limit=limit)
    return [ThemeRead.from_db(theme=theme) for theme in rows]


@router.post(
    "",
    response_model=ThemeRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_theme(
    payload: ThemeCreate,
    response: Response,
    session: AsyncSession = Depends(get_session),
) -> ThemeRead:
    theme_repo = SqlAlchemyThemeRepository(session)
    async with session.begin():
        theme = await theme_usecase.add_theme(
            theme_repo,
            name=payload.name,
            description=payload.description,
            thumbnail=payload.thumbnail,
        )
        result = ThemeRead.from_db(theme=theme)
    response.headers["Location"] = f"/themes/{result.id}"
    return result


@router.delete(
    "/{theme_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_theme(
    theme_id: int = Path(..., ge=1),
    session: AsyncSession = Depends(get_session),
) -> Response:
    async with session.begin():
        try:
            await theme_usecase.delete_theme(
                SqlAlchemyThemeRepository(session),
                SqlAlchemyReservationRepository(session),
                theme_id=theme_id,
            )
        except ThemeInUseError:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="theme is reserved")
        except ThemeNotFoundError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="theme not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
