# employee-directory-api/app/services/departments.py
import logging
from typing import List

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import BadUserInputError, DepartmentInUseError, DuplicateDepartmentError, NotFoundError
from app.db import models
from app.schemas.department import DepartmentIn
from app.services.employees import parse_id, validation_message

logger = logging.getLogger(__name__)


def _validate(data: dict) -> DepartmentIn:
    try:
        return DepartmentIn(**{k: v for k, v in data.items() if v is not None})
    except ValidationError as e:
        raise BadUserInputError(validation_message(e))


def list_departments(db: Session) -> List[models.Department]:
    return db.query(models.Department).order_by(models.Department.name.asc()).all()


def get_department(db: Session, department_id) -> models.Department:
    department = db.query(models.Department).filter(models.Department.id == parse_id(department_id)).first()
    if not department:
        raise NotFoundError("Department not found")
    return department


def add_department(db: Session, data: dict) -> models.Department:
    department = models.Department(**_validate(data).model_dump())
    db.add(department)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateDepartmentError()
    db.refresh(department)
    logger.info("Department %r added", department.name)
    return department


def update_department(db: Session, department_id, data: dict) -> models.Department:
    """
    Employees reference departments by name, so a rename is carried over to
    them in the same transaction to keep the deletion guard accurate.
    """
    department = get_department(db, department_id)
    department_in = _validate(data)
    old_name = department.name

    department.name = department_in.name
    if "description" in department_in.model_fields_set:
        department.description = department_in.description
    if department.name != old_name:
        db.query(models.Employee).filter(models.Employee.department == old_name).update(
            {models.Employee.department: department.name}, synchronize_session=False
        )
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateDepartmentError()
    db.refresh(department)
    logger.info("Department %s updated", department.id)
    return department


def delete_department(db: Session, department_id) -> bool:
    department = get_department(db, department_id)

    # Manual referential check: the link is the name string, not a foreign key
    employee_count = db.query(models.Employee).filter(models.Employee.department == department.name).count()
    if employee_count > 0:
        raise DepartmentInUseError(employee_count)

    name = department.name
    db.delete(department)
    db.commit()
    logger.info("Department %r deleted", name)
    return True
