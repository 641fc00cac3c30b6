from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.rental.app.interface.i_user_directory_repo import IUserDirectoryRepo
from src.service.rental.domain.entity.user_entity import User
from src.service.rental.driven_adapter.model.user_model import UserModel


class UserDirectoryRepoImpl(IUserDirectoryRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_entity(db_user: UserModel) -> User:
        return User(name=db_user.name, email=db_user.email, id=db_user.id)

    @Logger.io
    async def get_by_id(self, *, user_id: int) -> User | None:
        db_user = await self.session.get(UserModel, user_id)

        if not db_user:
            return None

        return UserDirectoryRepoImpl._to_entity(db_user)

    @Logger.io
    async def create(self, *, user: User) -> User:
        db_user = UserModel(name=user.name, email=user.email)
        self.session.add(db_user)
        await self.session.flush()
        await self.session.refresh(db_user)

        return UserDirectoryRepoImpl._to_entity(db_user)
