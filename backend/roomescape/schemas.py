from datetime import date, time

from pydantic import BaseModel, Field, field_serializer, field_validator

from .models import Reservation, ReservationTime, Role, Theme


class TimeCreate(BaseModel):
    start_at: time


class TimeRead(BaseModel):
    id: int
    start_at: time

    @field_serializer("start_at")
    def _ser_time(self, value: time) -> str:
        return value.strftime("%H:%M")

    @classmethod
    def from_db(cls, *, reservation_time: ReservationTime) -> "TimeRead":
        return cls(id=reservation_time.id, start_at=reservation_time.start_at)


class AvailableTimeRead(TimeRead):
    already_booked: bool


class ThemeCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = Field(default="", max_length=1000)
    thumbnail: str = Field(default="", max_length=1000)

    @field_validator("name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value


class ThemeRead(BaseModel):
    id: int
    name: str
    description: str
    thumbnail: str

    @classmethod
    def from_db(cls, *, theme: Theme) -> "ThemeRead":
        return cls(id=theme.id, name=theme.name, description=theme.description, thumbnail=theme.thumbnail)


class ReservationCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    date: date
    time_id: int = Field(ge=1)
    theme_id: int = Field(ge=1)

    @field_validator("name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value


class ReservationRead(BaseModel):
    id: int
    name: str
    date: date
    time: TimeRead
    theme: ThemeRead

    @classmethod
    def from_db(cls, *, reservation: Reservation) -> "ReservationRead":
        return cls(
            id=reservation.id,
            name=reservation.name,
            date=reservation.date,
            time=TimeRead.from_db(reservation_time=reservation.time),
            theme=ThemeRead.from_db(theme=reservation.theme),
        )


class MemberCreate(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=255)


class MemberRead(BaseModel):
    id: int
    email: str
    name: str
    role: Role


class LoginRequest(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    password: str


class LoginCheckResponse(BaseModel):
    name: str
