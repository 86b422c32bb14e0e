"""Pydantic schemas for Enrollment resources"""
from pydantic import BaseModel, ConfigDict, Field


class EnrollmentRead(BaseModel):
    """Schema returned when reading an enrollment."""

    account: str = Field(..., description="Enrolled account")
    plan_id: int = Field(..., description="Plan identifier")
    start_tick: int = Field(..., description="Tick of enrollment")
    next_payment_tick: int = Field(..., description="Tick from which the next charge is due")
    active: bool
    payment_count: int = Field(..., description="Charges collected so far")

    model_config = ConfigDict(from_attributes=True)


class SubscriptionCount(BaseModel):
    count: int


class PaymentDue(BaseModel):
    account: str
    plan_id: int
    due: bool
