"""Pydantic request bodies for the public API."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


# ----------------------------------------------------------------------
# Business settings
# ----------------------------------------------------------------------
class BusinessInfoUpdate(BaseModel):
    business_name: str = Field(..., min_length=1)
    dba_registration_date: Optional[str] = None
    services_offered: Optional[str] = None
    pricing_structure: Optional[str] = None
    business_email: Optional[str] = None
    business_phone: Optional[str] = None
    target_customer: Optional[str] = None


class GoalToggle(BaseModel):
    is_achieved: bool


class ToolToggle(BaseModel):
    is_set_up: bool


# ----------------------------------------------------------------------
# Daily log
# ----------------------------------------------------------------------
class DailyLogCreate(BaseModel):
    date: str
    main_goal: str = ""


class FailureData(BaseModel):
    what: str = ""
    why: str = ""
    adjust: str = ""


class LogDetailsUpdate(BaseModel):
    main_goal: Optional[str] = None
    failure_data: Optional[FailureData] = None
    tomorrow_priorities: Optional[List[str]] = Field(default=None, max_length=3)


class ExpensesUpdate(BaseModel):
    expenses: float = Field(..., ge=0, allow_inf_nan=False)


class AppointmentCreate(BaseModel):
    daily_log_id: str
    time: str
    customer: str
    service: str


class OutreachCreate(BaseModel):
    daily_log_id: str
    time: str
    method: str
    person: str
    response: Literal["Y", "N", "M", ""] = ""
    follow_up_needed: bool = False


class OutreachUpdate(BaseModel):
    time: Optional[str] = None
    method: Optional[str] = None
    person: Optional[str] = None
    response: Optional[Literal["Y", "N", "M", ""]] = None
    follow_up_needed: Optional[bool] = None


class CompletedJobCreate(BaseModel):
    daily_log_id: str
    customer: str
    service: str
    amount_charged: float = Field(..., ge=0, allow_inf_nan=False)
    is_paid: bool
    referral_asked: bool = False
    notes: Optional[str] = None


class CompletedJobUpdate(BaseModel):
    customer: Optional[str] = None
    service: Optional[str] = None
    amount_charged: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    is_paid: Optional[bool] = None
    referral_asked: Optional[bool] = None
    notes: Optional[str] = None


# ----------------------------------------------------------------------
# Pipeline
# ----------------------------------------------------------------------
class LeadCreate(BaseModel):
    name: str = Field(..., min_length=1)
    contact: str = ""
    service_interest: str = ""
    source: str = ""
    date_added: str
    status: str = "new"
    next_action: str = ""


class LeadUpdate(BaseModel):
    name: Optional[str] = None
    contact: Optional[str] = None
    service_interest: Optional[str] = None
    source: Optional[str] = None
    date_added: Optional[str] = None
    status: Optional[str] = None
    next_action: Optional[str] = None


class FollowUpCreate(BaseModel):
    customer_name: str = Field(..., min_length=1)
    last_contact: str
    reason: str = ""
    follow_up_date: str
    notes: str = ""


class FollowUpUpdate(BaseModel):
    customer_name: Optional[str] = None
    last_contact: Optional[str] = None
    reason: Optional[str] = None
    follow_up_date: Optional[str] = None
    notes: Optional[str] = None


class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1)
    contact: str = ""
    first_job_date: str


class CustomerUpdate(BaseModel):
    name: Optional[str] = None
    contact: Optional[str] = None
    first_job_date: Optional[str] = None
    last_job_date: Optional[str] = None
    total_jobs: Optional[int] = Field(default=None, ge=0)
    total_revenue: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    referrals_given: Optional[int] = Field(default=None, ge=0)


# ----------------------------------------------------------------------
# Financials
# ----------------------------------------------------------------------
class FinancialEntryCreate(BaseModel):
    date: str
    type: Literal["revenue", "expense"]
    amount: float = Field(..., ge=0, allow_inf_nan=False)
    category: Optional[str] = None
    notes: Optional[str] = None


class FinancialEntryUpdate(BaseModel):
    date: Optional[str] = None
    type: Optional[Literal["revenue", "expense"]] = None
    amount: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    category: Optional[str] = None
    notes: Optional[str] = None


# ----------------------------------------------------------------------
# Scripts
# ----------------------------------------------------------------------
class ScriptCreate(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = ""


class ScriptUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None


class HandlerCreate(BaseModel):
    objection: str = Field(..., min_length=1)
    response: str = ""


class HandlerUpdate(BaseModel):
    objection: Optional[str] = None
    response: Optional[str] = None


# ----------------------------------------------------------------------
# Responses
# ----------------------------------------------------------------------
class WebhookAck(BaseModel):
    processed: bool
    event_type: str


class SubscriptionStatus(BaseModel):
    plan: Literal["free", "pro"]
    ends_at: Optional[int] = None
