# employee-directory-api/app/api/graphql/mutations.py
import dataclasses

import strawberry
from strawberry.types import Info

from app.api.graphql.context import Context
from app.api.graphql.types import (
    AuthPayload, DepartmentInput, DepartmentType, EmployeeInput, EmployeeType,
    OTPResponse, UpdateEmployeeInput, UserType, employee_fields,
)
from app.core import security
from app.core.security import require_admin
from app.db.session import run_in_store
from app.services import departments, employees, sessions
from app.services import otp as otp_service


@strawberry.type
class Mutation:
    # --- OTP login ---

    @strawberry.mutation(name="requestOTP")
    async def request_otp(self, info: Info[Context, None], email: str) -> OTPResponse:
        result = await otp_service.request_otp(info.context.db, email)
        return OTPResponse(success=result.success, message=result.message, otp=result.otp)

    @strawberry.mutation(name="verifyOTP")
    async def verify_otp(self, info: Info[Context, None], email: str, otp: str) -> AuthPayload:
        db = info.context.db

        def login():
            user = otp_service.verify_otp(db, email, otp)
            login_session = sessions.create_session(db, user)
            payload = AuthPayload(user=UserType.from_model(user), message="Login successful")
            return payload, login_session.token, login_session.expires_at

        payload, token, expires_at = await run_in_store(db, "verify OTP", login)
        security.set_session_cookie(info.context.response, token, expires_at)
        return payload

    @strawberry.mutation
    async def logout(self, info: Info[Context, None]) -> bool:
        await run_in_store(info.context.db, "logout", sessions.destroy_session, info.context.db, info.context.session_token)
        security.clear_session_cookie(info.context.response)
        return True

    # --- Employees (admin only) ---

    @strawberry.mutation
    async def add_employee(self, info: Info[Context, None], input: EmployeeInput) -> EmployeeType:
        require_admin(info.context)
        db = info.context.db
        fields = employee_fields(input)
        return await run_in_store(db, "add employee", lambda: EmployeeType.from_model(employees.add_employee(db, fields)))

    @strawberry.mutation
    async def update_employee(self, info: Info[Context, None], id: strawberry.ID, input: UpdateEmployeeInput) -> EmployeeType:
        require_admin(info.context)
        db = info.context.db
        fields = employee_fields(input)
        return await run_in_store(
            db, "update employee", lambda: EmployeeType.from_model(employees.update_employee(db, id, fields))
        )

    @strawberry.mutation
    async def delete_employee(self, info: Info[Context, None], id: strawberry.ID) -> bool:
        require_admin(info.context)
        return await run_in_store(info.context.db, "delete employee", employees.delete_employee, info.context.db, id)

    # --- Departments (admin only) ---

    @strawberry.mutation
    async def add_department(self, info: Info[Context, None], input: DepartmentInput) -> DepartmentType:
        require_admin(info.context)
        db = info.context.db
        fields = dataclasses.asdict(input)
        return await run_in_store(
            db, "add department", lambda: DepartmentType.from_model(departments.add_department(db, fields))
        )

    @strawberry.mutation
    async def update_department(self, info: Info[Context, None], id: strawberry.ID, input: DepartmentInput) -> DepartmentType:
        require_admin(info.context)
        db = info.context.db
        fields = dataclasses.asdict(input)
        return await run_in_store(
            db, "update department", lambda: DepartmentType.from_model(departments.update_department(db, id, fields))
        )

    @strawberry.mutation
    async def delete_department(self, info: Info[Context, None], id: strawberry.ID) -> bool:
        require_admin(info.context)
        return await run_in_store(info.context.db, "delete department", departments.delete_department, info.context.db, id)
