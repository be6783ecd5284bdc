# employee-directory-api/app/api/graphql/queries.py
from typing import List, Optional

import strawberry
from strawberry.types import Info

from app.api.graphql.context import Context
from app.api.graphql.types import DepartmentType, EmployeeConnection, EmployeeFilterInput, EmployeeType, UserType
from app.core.security import require_authenticated
from app.db import models
from app.db.session import run_in_store
from app.schemas.employee import SortField, SortOrder
from app.services import departments, employees


@strawberry.type
class Query:
    @strawberry.field
    async def employees(
        self,
        info: Info[Context, None],
        filter: Optional[EmployeeFilterInput] = None,
        page: int = 1,
        page_size: int = 10,
        sort_by: SortField = SortField.name,
        sort_order: SortOrder = SortOrder.ASC,
    ) -> EmployeeConnection:
        """Filtered, sorted and paginated employee list."""
        require_authenticated(info.context)
        db = info.context.db

        def fetch():
            result = employees.list_employees(
                db,
                filters=filter.to_filter() if filter else None,
                page=page,
                page_size=page_size,
                sort_by=sort_by,
                sort_order=sort_order,
            )
            return EmployeeConnection.from_page(result)

        return await run_in_store(db, "fetch employees", fetch)

    @strawberry.field
    async def employee(self, info: Info[Context, None], id: strawberry.ID) -> Optional[EmployeeType]:
        require_authenticated(info.context)
        db = info.context.db
        return await run_in_store(db, "fetch employee", lambda: EmployeeType.from_model(employees.get_employee(db, id)))

    @strawberry.field
    async def me(self, info: Info[Context, None]) -> Optional[UserType]:
        """The logged-in user, or null. Used by clients to probe the session."""
        if info.context.user is None:
            return None
        db = info.context.db

        def fetch():
            user = db.get(models.User, info.context.user.id)
            return UserType.from_model(user) if user else None

        return await run_in_store(db, "fetch user", fetch)

    @strawberry.field
    async def departments(self, info: Info[Context, None]) -> List[DepartmentType]:
        require_authenticated(info.context)
        db = info.context.db
        return await run_in_store(
            db, "fetch departments", lambda: [DepartmentType.from_model(d) for d in departments.list_departments(db)]
        )

    @strawberry.field
    async def department(self, info: Info[Context, None], id: strawberry.ID) -> Optional[DepartmentType]:
        require_authenticated(info.context)
        db = info.context.db
        return await run_in_store(
            db, "fetch department", lambda: DepartmentType.from_model(departments.get_department(db, id))
        )
