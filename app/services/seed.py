# employee-directory-api/app/services/seed.py
import logging
from datetime import date

from sqlalchemy.orm import Session

from app.core.config import settings
from app.db import models

logger = logging.getLogger(__name__)

DEPARTMENTS = [
    ("Engineering", "Software development and technical operations"),
    ("Marketing", "Marketing and brand management"),
    ("Sales", "Sales and business development"),
    ("Human Resources", "HR and talent management"),
    ("Finance", "Financial planning and accounting"),
    ("Operations", "Business operations and logistics"),
]

# name, age, class, subjects, attendance, department, position, join date, salary
EMPLOYEES = [
    ("John Doe", 30, "Senior", ["React", "Node.js", "GraphQL"], 95, "Engineering", "Senior Software Engineer", date(2020, 1, 15), 120000),
    ("Jane Smith", 28, "Mid-Level", ["Marketing Strategy", "Social Media"], 92, "Marketing", "Marketing Manager", date(2021, 3, 20), 85000),
    ("Michael Johnson", 35, "Lead", ["Sales Strategy", "Negotiations"], 88, "Sales", "Sales Director", date(2019, 6, 10), 135000),
    ("Emily Davis", 32, "Senior", ["Recruitment", "Employee Relations"], 96, "Human Resources", "HR Manager", date(2020, 9, 1), 95000),
    ("David Wilson", 40, "Manager", ["Financial Planning", "Budgeting"], 98, "Finance", "Finance Manager", date(2018, 2, 15), 140000),
    ("Sarah Brown", 26, "Junior", ["Logistics", "Supply Chain"], 90, "Operations", "Operations Coordinator", date(2022, 4, 1), 65000),
    ("Robert Martinez", 29, "Mid-Level", ["Database Design", "API Development"], 94, "Engineering", "Full-Stack Developer", date(2021, 7, 12), 98000),
    ("James Taylor", 27, "Junior", ["CRM Management", "Lead Generation"], 87, "Sales", "Sales Representative", date(2022, 1, 20), 55000),
    ("Amanda White", 33, "Senior", ["Cloud Architecture", "DevOps"], 97, "Engineering", "DevOps Engineer", date(2019, 10, 5), 130000),
]


def seed_database(db: Session) -> bool:
    """Populate an empty database. Returns False when users already exist."""
    if db.query(models.User).count() > 0:
        logger.info("Database already seeded, skipping")
        return False

    db.add_all([
        models.User(username="admin", email=settings.ADMIN_EMAIL.lower(), role="admin"),
        models.User(username="employee", email=settings.EMPLOYEE_EMAIL.lower(), role="employee"),
    ])
    db.add_all([models.Department(name=name, description=description) for name, description in DEPARTMENTS])

    for index, (name, age, employee_class, subjects, attendance, department, position, join_date, salary) in enumerate(EMPLOYEES, start=1):
        db.add(models.Employee(
            name=name, age=age, employee_class=employee_class, subjects=subjects,
            attendance=attendance, email=f"{name.lower().replace(' ', '.')}@company.com",
            phone=f"+1-555-01{index:02d}", department=department, position=position,
            join_date=join_date, salary=salary,
            address=f"{100 + index} Market Street, San Francisco, CA", status="Active",
        ))

    db.commit()
    logger.info(
        "Seeded %d departments and %d employees; log in with %s (admin) or %s (employee)",
        len(DEPARTMENTS), len(EMPLOYEES), settings.ADMIN_EMAIL, settings.EMPLOYEE_EMAIL,
    )
    return True
