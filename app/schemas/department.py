# employee-directory-api/app/schemas/department.py
from pydantic import BaseModel, ConfigDict, Field

class DepartmentIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=100)
    description: str = ""
