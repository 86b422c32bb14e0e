"""Pydantic schemas for Plan resources"""
from pydantic import BaseModel, ConfigDict, Field

from smartbill.db.models.plan import DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH


# Largest value a BIGINT column holds
BIGINT_MAX = 2**63 - 1


class PlanCreate(BaseModel):
    """Schema for publishing a plan."""

    name: str = Field(..., max_length=NAME_MAX_LENGTH, description="Plan name")
    description: str = Field(
        default="", max_length=DESCRIPTION_MAX_LENGTH, description="Plan description"
    )
    price: int = Field(..., ge=0, le=BIGINT_MAX, description="Charge per period in native units")
    # Lower bound is checked by the registry so a bad period reports INVALID_PERIOD
    period: int = Field(..., le=BIGINT_MAX, description="Ticks between charges")


class PlanUpdate(PlanCreate):
    """Schema for overwriting a plan. Every field must be supplied."""

    description: str = Field(
        ..., max_length=DESCRIPTION_MAX_LENGTH, description="Plan description"
    )
    active: bool = Field(..., description="Whether the plan accepts subscribers")


class PlanRead(BaseModel):
    """Schema returned when reading a plan."""

    id: int = Field(..., description="Plan identifier")
    owner: str = Field(..., description="Account that published the plan")
    name: str
    description: str
    price: int
    period: int
    active: bool

    model_config = ConfigDict(from_attributes=True)


class PlanCreated(BaseModel):
    plan_id: int


class PlanCount(BaseModel):
    count: int
