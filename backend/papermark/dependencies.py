import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from papermark.database import get_db
from papermark.models import Dataroom, User, UserTeam
from papermark.services.auth import decode_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    if credentials is None:
        raise _unauthorized()
    try:
        token_data = decode_token(credentials.credentials)
    except Exception as e:
        logger.warning("Invalid token", extra={"error": str(e)})
        raise _unauthorized()
    result = await db.execute(select(User).where(User.id == token_data.user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise _unauthorized()
    return user


async def get_team_membership(
    team_id: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
) -> UserTeam:
    """The caller's membership in ``team_id``; 401 when they are not a member."""
    result = await db.execute(
        select(UserTeam).where(UserTeam.team_id == team_id, UserTeam.user_id == user.id)
    )
    membership = result.scalar_one_or_none()
    if membership is None:
        logger.warning("Not a team member", extra={"team_id": team_id, "user_id": user.id})
        raise _unauthorized()
    return membership


async def get_team_dataroom(
    dataroom_id: str,
    db: AsyncSession = Depends(get_db),
    membership: UserTeam = Depends(get_team_membership),
) -> Dataroom:
    result = await db.execute(
        select(Dataroom).where(Dataroom.id == dataroom_id, Dataroom.team_id == membership.team_id)
    )
    dataroom = result.scalar_one_or_none()
    if dataroom is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Dataroom not found")
    return dataroom
