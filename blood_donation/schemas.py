"""
Request payload schemas.

Create payloads validate the full shape of a new row. Update payloads are
frozen command objects: a field that was not sent stays unset and is left
untouched by ``merge``, so "not provided" and "cleared" never get confused.
"""

from datetime import datetime, timezone
from typing import Annotated, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, PositiveInt, field_validator

from blood_donation.models import UserRole, RequestStatus, AppointmentStatus, DonationStatus

BLOOD_GROUP_PATTERN = r'^(A|B|AB|O)[+-]$'

RoleName = Literal[UserRole.ADMIN, UserRole.DONOR, UserRole.RECIPIENT]
RequestStatusName = Literal[RequestStatus.PENDING, RequestStatus.APPROVED,
                            RequestStatus.FULFILLED, RequestStatus.CANCELLED]
AppointmentStatusName = Literal[AppointmentStatus.SCHEDULED, AppointmentStatus.COMPLETED,
                                AppointmentStatus.CANCELLED, AppointmentStatus.PENDING]
DonationStatusName = Literal[DonationStatus.COMPLETED, DonationStatus.PENDING,
                             DonationStatus.CANCELLED, DonationStatus.REJECTED]


class Payload(BaseModel):
    model_config = ConfigDict(extra='ignore', str_strip_whitespace=True)


class UpdateCommand(BaseModel):
    model_config = ConfigDict(extra='ignore', str_strip_whitespace=True, frozen=True)


def to_naive_utc(value):
    """Stored timestamps are naive UTC; convert aware input instead of comparing mixed kinds."""
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(to_naive_utc)]


def merge(current, command):
    """Return a copy of ``current`` with only the fields explicitly set on ``command`` replaced."""
    merged = dict(current)
    merged.update(command.model_dump(exclude_unset=True))
    return merged


# Users
class UserCreate(Payload):
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: RoleName
    phone: Optional[str] = Field(None, max_length=15)


class UserUpdate(UpdateCommand):
    first_name: str = Field(None, min_length=1, max_length=50)
    last_name: str = Field(None, min_length=1, max_length=50)
    username: str = Field(None, min_length=3, max_length=50)
    email: EmailStr = None
    phone: Optional[str] = Field(None, max_length=15)


# Donor and recipient profiles
class DonorProfileCreate(Payload):
    user_id: PositiveInt
    blood_group: str = Field(..., pattern=BLOOD_GROUP_PATTERN)
    age: int = Field(..., ge=18, le=65)
    gender: str = Field(..., min_length=1, max_length=20)
    last_donation_date: Optional[UtcDatetime] = None


class DonorProfileUpdate(UpdateCommand):
    blood_group: str = Field(None, pattern=BLOOD_GROUP_PATTERN)
    age: int = Field(None, ge=18, le=65)
    gender: str = Field(None, min_length=1, max_length=20)
    last_donation_date: Optional[UtcDatetime] = None
    eligibility_status: bool = None


class RecipientProfileCreate(Payload):
    user_id: PositiveInt
    hospital_name: str = Field(..., min_length=3, max_length=100)
    patient_name: str = Field(..., min_length=2, max_length=100)
    required_blood_group: str = Field(..., pattern=BLOOD_GROUP_PATTERN)
    contact_number: str = Field(..., min_length=1, max_length=15)


class RecipientProfileUpdate(UpdateCommand):
    hospital_name: str = Field(None, min_length=3, max_length=100)
    patient_name: str = Field(None, min_length=2, max_length=100)
    required_blood_group: str = Field(None, pattern=BLOOD_GROUP_PATTERN)
    contact_number: str = Field(None, min_length=1, max_length=15)


# Blood banks and stock
class BloodBankCreate(Payload):
    name: str = Field(..., min_length=3, max_length=100, pattern=r'^[A-Za-z\s]+$')
    location: str = Field(..., min_length=3, max_length=100)
    contact_number: str = Field(..., pattern=r'^[6-9]\d{9}$')
    email: EmailStr
    capacity: int = Field(..., ge=1, le=10000)
    managed_by: Optional[str] = Field(None, max_length=50, pattern=r'^[A-Za-z\s]*$')


class BloodBankUpdate(UpdateCommand):
    name: str = Field(None, min_length=3, max_length=100, pattern=r'^[A-Za-z\s]+$')
    location: str = Field(None, min_length=3, max_length=100)
    contact_number: str = Field(None, pattern=r'^[6-9]\d{9}$')
    email: EmailStr = None
    capacity: int = Field(None, ge=1, le=10000)
    managed_by: Optional[str] = Field(None, max_length=50, pattern=r'^[A-Za-z\s]*$')


class BloodStockCreate(Payload):
    blood_bank_id: PositiveInt
    blood_group: str = Field(..., pattern=BLOOD_GROUP_PATTERN)
    units_available: int = Field(..., ge=0, le=500)


class BloodStockUpdate(Payload):
    units_available: int = Field(..., ge=0, le=500)


# Blood requests
class BloodRequestCreate(Payload):
    # The recipient profile is resolved from this user id
    recipient_user_id: PositiveInt
    blood_group_needed: str = Field(..., pattern=BLOOD_GROUP_PATTERN)
    quantity: int = Field(..., ge=1, le=10)


class BloodRequestStatusUpdate(Payload):
    status: RequestStatusName
    override: bool = False


class FulfillRequest(Payload):
    donor_id: PositiveInt
    blood_bank_id: Optional[PositiveInt] = None


class DonorResponse(Payload):
    donor_id: PositiveInt
    response: Literal['accept', 'decline']

    @field_validator('response', mode='before')
    @classmethod
    def lower_response(cls, value):
        return value.lower() if isinstance(value, str) else value


class LinkResponse(Payload):
    response: Literal['accept', 'decline']

    @field_validator('response', mode='before')
    @classmethod
    def lower_response(cls, value):
        return value.lower() if isinstance(value, str) else value


# Donations and appointments
class DonationCreate(Payload):
    donor_id: PositiveInt
    blood_bank_id: PositiveInt
    quantity: int = Field(..., ge=1, le=5)


class AppointmentCreate(Payload):
    donor_id: PositiveInt
    blood_bank_id: PositiveInt
    appointment_date: UtcDatetime
    remarks: Optional[str] = Field(None, max_length=200)


class AppointmentUpdate(UpdateCommand):
    appointment_date: UtcDatetime = None
    blood_bank_id: PositiveInt = None
    status: AppointmentStatusName = None
    remarks: Optional[str] = Field(None, max_length=200)


class DonationStatusUpdate(Payload):
    status: DonationStatusName


# Notifications
class NotificationCreate(Payload):
    user_id: PositiveInt
    message: str = Field(..., min_length=5, max_length=250)
