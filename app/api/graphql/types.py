# employee-directory-api/app/api/graphql/types.py
import dataclasses
from typing import List, Optional

import strawberry

from app.db import models
from app.schemas.employee import EmployeeFilter, SortField, SortOrder
from app.services.employees import EmployeePage

# Shared with the service layer; GraphQL values are the member names
strawberry.enum(SortField, name="EmployeeSortField")
strawberry.enum(SortOrder, name="SortOrder")


# --- Output types ---

@strawberry.type(name="Employee")
class EmployeeType:
    id: strawberry.ID
    name: str
    age: int
    class_: str = strawberry.field(name="class")
    subjects: List[str]
    attendance: float
    email: str
    phone: str
    department: str
    position: str
    join_date: str
    salary: float
    address: str
    status: str

    @classmethod
    def from_model(cls, employee: models.Employee) -> "EmployeeType":
        return cls(
            id=strawberry.ID(str(employee.id)),
            name=employee.name,
            age=employee.age,
            class_=employee.employee_class,
            subjects=list(employee.subjects or []),
            attendance=employee.attendance,
            email=employee.email,
            phone=employee.phone,
            department=employee.department,
            position=employee.position,
            join_date=employee.join_date.isoformat(),
            salary=employee.salary,
            address=employee.address,
            status=employee.status,
        )


@strawberry.type(name="Department")
class DepartmentType:
    id: strawberry.ID
    name: str
    description: Optional[str]
    created_at: str

    @classmethod
    def from_model(cls, department: models.Department) -> "DepartmentType":
        return cls(
            id=strawberry.ID(str(department.id)),
            name=department.name,
            description=department.description,
            created_at=department.created_at.isoformat(),
        )


@strawberry.type(name="User")
class UserType:
    id: strawberry.ID
    username: str
    email: str
    role: str

    @classmethod
    def from_model(cls, user) -> "UserType":
        return cls(id=strawberry.ID(str(user.id)), username=user.username, email=user.email, role=user.role)


@strawberry.type
class AuthPayload:
    user: UserType
    message: Optional[str] = None


@strawberry.type(name="OTPResponse")
class OTPResponse:
    success: bool
    message: str
    otp: Optional[str] = None


@strawberry.type
class PageInfo:
    current_page: int
    page_size: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool


@strawberry.type
class EmployeeConnection:
    employees: List[EmployeeType]
    total_count: int
    page_info: PageInfo

    @classmethod
    def from_page(cls, result: EmployeePage) -> "EmployeeConnection":
        return cls(
            employees=[EmployeeType.from_model(e) for e in result.employees],
            total_count=result.total_count,
            page_info=PageInfo(**result.page_info.model_dump()),
        )


# --- Inputs ---

@strawberry.input
class EmployeeFilterInput:
    name: Optional[str] = None
    department: Optional[str] = None
    class_: Optional[str] = strawberry.field(name="class", default=None)
    status: Optional[str] = None
    min_age: Optional[int] = None
    max_age: Optional[int] = None

    def to_filter(self) -> EmployeeFilter:
        return EmployeeFilter(**employee_fields(self))


@strawberry.input
class EmployeeInput:
    name: str
    age: int
    class_: str = strawberry.field(name="class")
    subjects: List[str]
    attendance: float
    email: str
    phone: str
    department: str
    position: str
    join_date: str
    salary: float
    address: str
    status: str


@strawberry.input
class UpdateEmployeeInput:
    name: Optional[str] = None
    age: Optional[int] = None
    class_: Optional[str] = strawberry.field(name="class", default=None)
    subjects: Optional[List[str]] = None
    attendance: Optional[float] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    join_date: Optional[str] = None
    salary: Optional[float] = None
    address: Optional[str] = None
    status: Optional[str] = None


@strawberry.input
class DepartmentInput:
    name: str
    description: Optional[str] = None


def employee_fields(value) -> dict:
    """Plain dict of an input object, keyed the way the service layer names fields."""
    data = dataclasses.asdict(value)
    data["employee_class"] = data.pop("class_")
    return data
