"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field

from expense_ai.domain.models import ExpenseCategory, ExpenseRecord, Insight, InsightType


class ExpenseSchema(BaseModel):
    """Expense record supplied by the caller"""

    id: str = Field(..., min_length=1, description="Expense identifier")
    amount: Decimal = Field(..., description="Expense amount")
    category: str = Field(..., description="Current category label")
    description: str = Field("", description="Free-text description")
    date: datetime = Field(..., description="When the expense happened")

    def to_domain(self) -> ExpenseRecord:
        return ExpenseRecord(
            id=self.id,
            amount=self.amount,
            category=self.category,
            description=self.description,
            date=self.date,
        )


class CategorizeRequest(BaseModel):
    """Request body for POST /v1/ai/categorize"""

    description: str = Field(..., description="Expense description to categorize")


class CategorizeResponse(BaseModel):
    """Response for POST /v1/ai/categorize"""

    category: ExpenseCategory
    degraded: bool


class InsightsRequest(BaseModel):
    """Request body for POST /v1/ai/insights"""

    expenses: List[ExpenseSchema] = Field(default_factory=list)


class InsightSchema(BaseModel):
    """Single insight in a response"""

    id: str
    type: InsightType
    title: str
    message: str
    action: Optional[str] = None
    confidence: float

    @classmethod
    def from_domain(cls, insight: Insight) -> "InsightSchema":
        return cls(
            id=insight.id,
            type=insight.type,
            title=insight.title,
            message=insight.message,
            action=insight.action,
            confidence=insight.confidence,
        )


class InsightsResponse(BaseModel):
    """Response for POST /v1/ai/insights"""

    insights: List[InsightSchema]
    degraded: bool


class AnswerRequest(BaseModel):
    """Request body for POST /v1/ai/answer"""

    question: str = Field(..., min_length=1, description="Question about the expenses")
    expenses: List[ExpenseSchema] = Field(default_factory=list)


class AnswerResponse(BaseModel):
    """Response for POST /v1/ai/answer"""

    answer: str
    degraded: bool


class PlanSchema(BaseModel):
    """Subscription tier shown in the upgrade dialog"""

    tier: str
    name: str
    monthly_price_usd: int
    tagline: str
    badge: str
    features: List[str]


class PlansResponse(BaseModel):
    """Response for GET /v1/plans"""

    plans: List[PlanSchema]
    guarantee: str


class UpgradeRequest(BaseModel):
    """Request body for POST /v1/plans/upgrade"""

    plan: str = Field(..., min_length=1, description="Tier to upgrade to (gold or diamond)")


class UpgradeResponse(BaseModel):
    """Response for POST /v1/plans/upgrade"""

    plan: str
    status: str
    message: str


class DebugInfo(BaseModel):
    """Connection details reported by the debug route"""

    has_api_key: bool
    api_key_prefix: str
    base_url: str
    app_url: str


class DebugAIRequest(BaseModel):
    """Request body for POST /v1/test-ai"""

    description: str = ""
    test_insights: bool = Field(False, validation_alias=AliasChoices("test_insights", "testInsights"))
