from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, EmailStr, Field, StringConstraints


NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=120)]
RollNumberStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=30)]
DepartmentStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=80)]
PhoneStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=6, max_length=20)]


class StudentRegister(BaseModel):
    name: NameStr
    email: EmailStr
    roll_number: RollNumberStr
    department: DepartmentStr | None = None
    phone: PhoneStr | None = None
    password: str = Field(..., min_length=8, max_length=128)

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Asha Rao",
                "email": "asha@college.edu",
                "roll_number": "CS21B042",
                "department": "Computer Science",
                "phone": "9876543210",
                "password": "StrongPass123",
            }
        }
    }


class StudentLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class StudentProfileUpdate(BaseModel):
    name: NameStr | None = None
    department: DepartmentStr | None = None
    phone: PhoneStr | None = None
    cgpa: float | None = Field(default=None, ge=0, le=10)
    graduation_year: int | None = Field(default=None, ge=1990, le=2100)
    attendance: float | None = Field(default=None, ge=0, le=100)


class StudentOut(BaseModel):
    id: int
    name: str
    email: str
    roll_number: str
    department: str | None
    phone: str | None
    cgpa: float | None
    graduation_year: int | None
    attendance: float | None
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class StudentLoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    student: StudentOut


class StudentListItemOut(BaseModel):
    """Row of the admin "Registered students" table."""
    id: int
    name: str
    email: str
    roll_number: str
    department: str | None
    is_active: bool
    created_at: datetime

    activities_count: int = 0
    approved_count: int = 0
    total_points: int = 0
