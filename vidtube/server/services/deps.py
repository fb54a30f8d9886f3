"""
Request Dependencies.

``Annotated`` aliases injected into the API routers.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.database import get_session
from vidtube.core.database.entities.users import User
from vidtube.core.database.repositories import SqlRepoBundle, build_sql_repos_from_session
from vidtube.core.media import CloudinaryClient

from .auth import get_current_user
from .media import get_media_storage
from .params import PageParams


def get_repos(session: AsyncSession = Depends(get_session)) -> SqlRepoBundle:
    return build_sql_repos_from_session(session=session)


SessionDep = Annotated[AsyncSession, Depends(get_session)]
ReposDep = Annotated[SqlRepoBundle, Depends(get_repos)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]
MediaStorageDep = Annotated[CloudinaryClient, Depends(get_media_storage)]
PageDep = Annotated[PageParams, Depends()]
