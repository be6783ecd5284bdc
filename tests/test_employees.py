import asyncio

import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import BadUserInputError
from app.db import models
from app.schemas.employee import EmployeeFilter, SortField, SortOrder
from app.services import employees as employee_service
from conftest import error_code, gql

EMPLOYEES = """
query Employees($filter: EmployeeFilterInput, $page: Int, $pageSize: Int,
                $sortBy: EmployeeSortField, $sortOrder: SortOrder) {
  employees(filter: $filter, page: $page, pageSize: $pageSize, sortBy: $sortBy, sortOrder: $sortOrder) {
    employees { id name age class department status joinDate }
    totalCount
    pageInfo { currentPage pageSize totalPages hasNextPage hasPreviousPage }
  }
}
"""

EMPLOYEE = "query Employee($id: ID!) { employee(id: $id) { id name email subjects } }"

ADD_EMPLOYEE = """
mutation Add($input: EmployeeInput!) {
  addEmployee(input: $input) { id name email class joinDate status }
}
"""

UPDATE_EMPLOYEE = """
mutation Update($id: ID!, $input: UpdateEmployeeInput!) {
  updateEmployee(id: $id, input: $input) { id name age email position }
}
"""

DELETE_EMPLOYEE = "mutation Delete($id: ID!) { deleteEmployee(id: $id) }"


def new_employee(**overrides):
    employee = {
        "name": "Priya Patel",
        "age": 31,
        "class": "Senior",
        "subjects": ["Python", "PostgreSQL"],
        "attendance": 93.5,
        "email": "Priya.Patel@company.com",
        "phone": "+1-555-0200",
        "department": "Engineering",
        "position": "Backend Engineer",
        "joinDate": "2021-05-17",
        "salary": 115000,
        "address": "12 Mission Street, San Francisco, CA",
        "status": "Active",
    }
    employee.update(overrides)
    return employee


# --- Authorization ---

def test_employees_requires_login(client, seeded):
    result = gql(client, EMPLOYEES)

    assert result["data"] is None
    assert error_code(result) == "UNAUTHENTICATED"


def test_employee_role_can_read(employee_client):
    result = gql(employee_client, EMPLOYEES)

    assert result["data"]["employees"]["totalCount"] == 9


def test_employee_role_cannot_write(employee_client):
    result = gql(employee_client, ADD_EMPLOYEE, {"input": new_employee()})

    assert error_code(result) == "FORBIDDEN"


def test_anonymous_cannot_write(client, seeded):
    result = gql(client, DELETE_EMPLOYEE, {"id": "1"})

    assert error_code(result) == "UNAUTHENTICATED"
    assert seeded.query(models.Employee).count() == 9


# --- Filter / sort / paginate ---

def test_filter_department_is_exact(admin_client):
    result = gql(admin_client, EMPLOYEES, {"filter": {"department": "Engineering"}, "pageSize": 2})

    connection = result["data"]["employees"]
    assert connection["totalCount"] == 3
    assert len(connection["employees"]) == 2
    assert {e["department"] for e in connection["employees"]} == {"Engineering"}
    assert connection["pageInfo"] == {
        "currentPage": 1,
        "pageSize": 2,
        "totalPages": 2,
        "hasNextPage": True,
        "hasPreviousPage": False,
    }

    lower = gql(admin_client, EMPLOYEES, {"filter": {"department": "engineering"}})
    assert lower["data"]["employees"]["totalCount"] == 0


def test_filter_name_is_case_insensitive_substring(admin_client):
    result = gql(admin_client, EMPLOYEES, {"filter": {"name": "JO"}})

    names = [e["name"] for e in result["data"]["employees"]["employees"]]
    assert names == ["John Doe", "Michael Johnson"]


def test_filters_are_conjunctive(admin_client):
    result = gql(admin_client, EMPLOYEES, {
        "filter": {"department": "Engineering", "class": "Senior", "minAge": 31, "maxAge": 40},
    })

    names = [e["name"] for e in result["data"]["employees"]["employees"]]
    assert names == ["Amanda White"]


def test_page_past_the_end_is_empty(admin_client):
    result = gql(admin_client, EMPLOYEES, {"page": 5, "pageSize": 4})

    connection = result["data"]["employees"]
    assert connection["employees"] == []
    assert connection["totalCount"] == 9
    assert connection["pageInfo"]["totalPages"] == 3
    assert connection["pageInfo"]["hasNextPage"] is False
    assert connection["pageInfo"]["hasPreviousPage"] is True


def test_sort_by_age_desc(admin_client):
    result = gql(admin_client, EMPLOYEES, {"sortBy": "age", "sortOrder": "DESC", "pageSize": 3})

    ages = [e["age"] for e in result["data"]["employees"]["employees"]]
    assert ages == [40, 35, 33]


def test_invalid_page_is_rejected(admin_client):
    result = gql(admin_client, EMPLOYEES, {"page": 0})

    assert error_code(result) == "BAD_USER_INPUT"


def test_list_employees_sorts_strings_case_folded(seeded):
    seeded.add(models.Employee(
        name="aaron lowercase", age=22, employee_class="Junior", subjects=[], attendance=80,
        email="aaron@company.com", phone="1", department="Sales", position="Intern",
        join_date=models.utcnow().date(), salary=0, address="-", status="Inactive",
    ))
    seeded.commit()

    page = employee_service.list_employees(seeded, sort_by=SortField.name, page_size=2)

    assert [e.name for e in page.employees] == ["aaron lowercase", "Amanda White"]


def test_list_employees_status_filter(seeded):
    john = seeded.query(models.Employee).filter_by(name="John Doe").one()
    john.status = "On Leave"
    seeded.commit()

    page = employee_service.list_employees(
        seeded, EmployeeFilter(status="On Leave"), sort_order=SortOrder.DESC
    )

    assert [e.name for e in page.employees] == ["John Doe"]
    assert page.page_info.total_pages == 1


def test_list_employees_name_filter_matches_wildcards_literally(seeded):
    page = employee_service.list_employees(seeded, EmployeeFilter(name="%"))

    assert page.total_count == 0


def test_list_employees_rejects_zero_page_size(seeded):
    with pytest.raises(BadUserInputError):
        employee_service.list_employees(seeded, page_size=0)


# --- CRUD ---

def test_employee_not_found(admin_client):
    assert error_code(gql(admin_client, EMPLOYEE, {"id": "9999"})) == "NOT_FOUND"
    assert error_code(gql(admin_client, EMPLOYEE, {"id": "not-an-id"})) == "NOT_FOUND"


def test_add_employee(admin_client, seeded):
    result = gql(admin_client, ADD_EMPLOYEE, {"input": new_employee()})

    added = result["data"]["addEmployee"]
    assert added["email"] == "priya.patel@company.com"
    assert added["class"] == "Senior"
    assert added["joinDate"] == "2021-05-17"

    fetched = gql(admin_client, EMPLOYEE, {"id": added["id"]})["data"]["employee"]
    assert fetched["subjects"] == ["Python", "PostgreSQL"]


def test_add_employee_duplicate_email(admin_client):
    gql(admin_client, ADD_EMPLOYEE, {"input": new_employee()})

    result = gql(admin_client, ADD_EMPLOYEE, {"input": new_employee(name="Someone Else")})

    assert error_code(result) == "DUPLICATE_EMAIL"


@pytest.mark.parametrize("overrides", [
    {"age": 17},
    {"attendance": 101},
    {"salary": -1},
    {"class": "Intern"},
    {"status": "Retired"},
    {"email": "not-an-email"},
    {"joinDate": "yesterday"},
])
def test_add_employee_validation(admin_client, overrides):
    result = gql(admin_client, ADD_EMPLOYEE, {"input": new_employee(**overrides)})

    assert error_code(result) == "BAD_USER_INPUT"


def test_update_employee_partial(admin_client, seeded):
    john = seeded.query(models.Employee).filter_by(name="John Doe").one()

    result = gql(admin_client, UPDATE_EMPLOYEE, {"id": str(john.id), "input": {"age": 31, "position": "Staff Engineer"}})

    updated = result["data"]["updateEmployee"]
    assert updated["age"] == 31
    assert updated["position"] == "Staff Engineer"
    assert updated["email"] == "john.doe@company.com"


def test_update_employee_errors(admin_client, seeded):
    john = seeded.query(models.Employee).filter_by(name="John Doe").one()

    taken = gql(admin_client, UPDATE_EMPLOYEE, {"id": str(john.id), "input": {"email": "jane.smith@company.com"}})
    assert error_code(taken) == "DUPLICATE_EMAIL"

    invalid = gql(admin_client, UPDATE_EMPLOYEE, {"id": str(john.id), "input": {"age": 120}})
    assert error_code(invalid) == "BAD_USER_INPUT"

    missing = gql(admin_client, UPDATE_EMPLOYEE, {"id": "9999", "input": {"age": 30}})
    assert error_code(missing) == "NOT_FOUND"


def test_delete_employee(admin_client, seeded):
    john = seeded.query(models.Employee).filter_by(name="John Doe").one()
    john_id = str(john.id)

    assert gql(admin_client, DELETE_EMPLOYEE, {"id": john_id})["data"]["deleteEmployee"] is True
    assert error_code(gql(admin_client, DELETE_EMPLOYEE, {"id": john_id})) == "NOT_FOUND"
    assert seeded.query(models.Employee).count() == 8


# --- Failures and threading ---

def running_on_loop() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


def test_store_work_runs_off_the_event_loop(admin_client, monkeypatch):
    seen = []
    list_employees = employee_service.list_employees

    def recording(*args, **kwargs):
        seen.append(running_on_loop())
        return list_employees(*args, **kwargs)

    monkeypatch.setattr(employee_service, "list_employees", recording)

    assert gql(admin_client, EMPLOYEES)["data"]["employees"]["totalCount"] == 9
    assert seen == [False]


def test_store_failure_is_reported_without_detail(admin_client, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT * FROM employees", {}, Exception("disk I/O error"))

    monkeypatch.setattr(employee_service, "list_employees", broken)

    result = gql(admin_client, EMPLOYEES)

    assert error_code(result) == "INTERNAL_SERVER_ERROR"
    assert result["errors"][0]["message"] == "Failed to fetch employees"
    assert "disk" not in str(result["errors"])


def test_unexpected_error_is_masked(admin_client, monkeypatch):
    def broken(*args, **kwargs):
        raise KeyError("salary_band")

    monkeypatch.setattr(employee_service, "get_employee", broken)

    result = gql(admin_client, EMPLOYEE, {"id": "1"})

    assert error_code(result) == "INTERNAL_SERVER_ERROR"
    assert result["errors"][0]["message"] == "Internal server error"
    assert "salary_band" not in str(result["errors"])
