"""List users use case"""

from sqlalchemy.exc import SQLAlchemyError

from ...core.errors import AccountError, ErrorCode, all_users_error
from ...domain.repositories.unit_of_work import IUnitOfWork
from ..dtos.user_dtos import UserSummaryDto, UsersListResponse


class ListUsersUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self) -> UsersListResponse:
        """An empty store is a valid, empty payload; only a failed query is an error"""
        async with self.unit_of_work:
            try:
                rows = await self.unit_of_work.users.list_summaries()
            except SQLAlchemyError as e:
                raise AccountError.create(
                    name="Get all users fail",
                    cause=all_users_error(),
                    message="Could not list users",
                    code=ErrorCode.ALL_USERS_FAIL,
                ) from e

        return UsersListResponse(
            status="success",
            payload=[UserSummaryDto(**row) for row in rows],
        )
