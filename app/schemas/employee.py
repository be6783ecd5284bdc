# employee-directory-api/app/schemas/employee.py
from datetime import date
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

EmployeeClass = Literal["Junior", "Mid-Level", "Senior", "Lead", "Manager"]
EmployeeStatus = Literal["Active", "Inactive", "On Leave"]


class EmployeeBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("email", check_fields=False)
    @classmethod
    def lowercase_email(cls, value):
        return value.lower() if value is not None else value


class EmployeeCreate(EmployeeBase):
    name: str = Field(min_length=1, max_length=100)
    age: int = Field(ge=18, le=100)
    employee_class: EmployeeClass
    subjects: List[str] = []
    attendance: float = Field(ge=0, le=100)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=30)
    department: str = Field(min_length=1, max_length=100)
    position: str = Field(min_length=1, max_length=100)
    join_date: date
    salary: float = Field(ge=0)
    address: str = Field(min_length=1)
    status: EmployeeStatus = "Active"


class EmployeeUpdate(EmployeeBase):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    age: Optional[int] = Field(None, ge=18, le=100)
    employee_class: Optional[EmployeeClass] = None
    subjects: Optional[List[str]] = None
    attendance: Optional[float] = Field(None, ge=0, le=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1, max_length=30)
    department: Optional[str] = Field(None, min_length=1, max_length=100)
    position: Optional[str] = Field(None, min_length=1, max_length=100)
    join_date: Optional[date] = None
    salary: Optional[float] = Field(None, ge=0)
    address: Optional[str] = Field(None, min_length=1)
    status: Optional[EmployeeStatus] = None


class EmployeeFilter(BaseModel):
    name: Optional[str] = None
    department: Optional[str] = None
    employee_class: Optional[str] = None
    status: Optional[str] = None
    min_age: Optional[int] = None
    max_age: Optional[int] = None


class SortField(str, Enum):
    name = "name"
    age = "age"
    department = "department"
    attendance = "attendance"
    joinDate = "joinDate"
    salary = "salary"


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class PageInfo(BaseModel):
    current_page: int
    page_size: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool
