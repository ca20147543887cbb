"""Analytics API schemas."""

from pydantic import BaseModel, ConfigDict


class SummaryResponse(BaseModel):
    """Income/expense totals over the requested range."""

    model_config = ConfigDict(from_attributes=True)

    total_income: float
    total_expenses: float
    balance: float
    transaction_count: int
    income_count: int
    expense_count: int


class CategoryTotalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category_id: str
    category_name: str
    color: str
    total: float
    count: int
    percentage: float


class DateTotalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    period: str
    income: float
    expenses: float
    net: float


class CategoryUsageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    type: str
    color: str
    transaction_count: int
