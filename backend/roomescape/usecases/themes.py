from datetime import date, timedelta

from ..domain.errors import ThemeInUseError, ThemeNotFoundError
from ..domain.repositories import ReservationRepository, ThemeRepository
from ..models import Theme
from ..utils.time import today_local


async def get_themes(theme_repo: ThemeRepository) -> list[Theme]:
    return await theme_repo.find_all()


async def get_popular_themes(
    theme_repo: ThemeRepository,
    *,
    days: int,
    limit: int,
    today: date | None = None,
) -> list[Theme]:
    """Rank themes by reservations over the `days` days before today (today excluded)."""
    if days < 1:
        raise ValueError("days must be >= 1")
    if limit < 1:
        raise ValueError("limit must be >= 1")
    today = today or today_local()
    start = today - timedelta(days=days)
    end = today - timedelta(days=1)
    return await theme_repo.find_popular_themes(start, end, limit)


async def add_theme(
    theme_repo: ThemeRepository,
    *,
    name: str,
    description: str,
    thumbnail: str,
) -> Theme:
    if not name.strip():
        raise ValueError("name must not be blank")
    return await theme_repo.save(Theme(name=name, description=description, thumbnail=thumbnail))


async def delete_theme(
    theme_repo: ThemeRepository,
    res_repo: ReservationRepository,
    *,
    theme_id: int,
) -> int:
    if await res_repo.exists_by_theme_id(theme_id):
        raise ThemeInUseError(f"theme {theme_id} is referenced by reservations")
    deleted = await theme_repo.delete(theme_id)
    if deleted == 0:
        raise ThemeNotFoundError(f"theme {theme_id} does not exist")
    return deleted
