# employee-directory-api/app/services/employees.py
import logging
import math
from typing import List, NamedTuple

from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import BadUserInputError, DuplicateEmailError, NotFoundError
from app.db import models
from app.schemas.employee import EmployeeCreate, EmployeeFilter, EmployeeUpdate, PageInfo, SortField, SortOrder

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    SortField.name: models.Employee.name,
    SortField.age: models.Employee.age,
    SortField.department: models.Employee.department,
    SortField.attendance: models.Employee.attendance,
    SortField.joinDate: models.Employee.join_date,
    SortField.salary: models.Employee.salary,
}
CASE_FOLDED = {SortField.name, SortField.department}


class EmployeePage(NamedTuple):
    employees: List[models.Employee]
    total_count: int
    page_info: PageInfo


def validation_message(exc: ValidationError) -> str:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or "input"
    return f"Invalid {field}: {error['msg']}"


def parse_id(raw_id) -> int:
    try:
        return int(raw_id)
    except (TypeError, ValueError):
        return -1


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def list_employees(
    db: Session,
    filters: EmployeeFilter | None = None,
    page: int = 1,
    page_size: int = 10,
    sort_by: SortField = SortField.name,
    sort_order: SortOrder = SortOrder.ASC,
) -> EmployeePage:
    """
    Filter conjunctively, sort on a single field, then slice out one page.
    ``total_count`` is the size of the filtered set before slicing.
    """
    if page < 1:
        raise BadUserInputError("page must be at least 1")
    if page_size < 1:
        raise BadUserInputError("pageSize must be at least 1")

    query = db.query(models.Employee)
    if filters is not None:
        if filters.name:
            query = query.filter(models.Employee.name.ilike(f"%{_escape_like(filters.name)}%", escape="\\"))
        if filters.department:
            query = query.filter(models.Employee.department == filters.department)
        if filters.employee_class:
            query = query.filter(models.Employee.employee_class == filters.employee_class)
        if filters.status:
            query = query.filter(models.Employee.status == filters.status)
        if filters.min_age is not None:
            query = query.filter(models.Employee.age >= filters.min_age)
        if filters.max_age is not None:
            query = query.filter(models.Employee.age <= filters.max_age)

    total_count = query.count()

    column = SORT_COLUMNS[sort_by]
    if sort_by in CASE_FOLDED:
        column = func.lower(column)
    ordering = column.desc() if sort_order == SortOrder.DESC else column.asc()

    employees = (
        query.order_by(ordering, models.Employee.id.asc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )

    total_pages = math.ceil(total_count / page_size)
    return EmployeePage(
        employees=employees,
        total_count=total_count,
        page_info=PageInfo(
            current_page=page,
            page_size=page_size,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_previous_page=page > 1,
        ),
    )


def get_employee(db: Session, employee_id) -> models.Employee:
    employee = db.query(models.Employee).filter(models.Employee.id == parse_id(employee_id)).first()
    if not employee:
        raise NotFoundError("Employee not found")
    return employee


def add_employee(db: Session, data: dict) -> models.Employee:
    try:
        employee_in = EmployeeCreate(**data)
    except ValidationError as e:
        raise BadUserInputError(validation_message(e))

    employee = models.Employee(**employee_in.model_dump())
    db.add(employee)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEmailError()
    db.refresh(employee)
    logger.info("Employee %s added", employee.id)
    return employee


def update_employee(db: Session, employee_id, data: dict) -> models.Employee:
    employee = get_employee(db, employee_id)
    try:
        updates = EmployeeUpdate(**{k: v for k, v in data.items() if v is not None})
    except ValidationError as e:
        raise BadUserInputError(validation_message(e))

    for field, value in updates.model_dump(exclude_unset=True).items():
        setattr(employee, field, value)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEmailError()
    db.refresh(employee)
    logger.info("Employee %s updated", employee.id)
    return employee


def delete_employee(db: Session, employee_id) -> bool:
    employee = get_employee(db, employee_id)
    db.delete(employee)
    db.commit()
    logger.info("Employee %s deleted", employee_id)
    return True
