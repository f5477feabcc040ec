"""Domain models - pure Python dataclasses representing expense and insight entities"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")


class ExpenseCategory(str, Enum):
    """Closed set of expense categories; OTHER is the catch-all"""

    FOOD = "Food"
    TRANSPORTATION = "Transportation"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    BILLS = "Bills"
    HEALTHCARE = "Healthcare"
    OTHER = "Other"


class InsightType(str, Enum):
    """Kind of insight shown to the user"""

    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"
    TIP = "tip"


@dataclass(frozen=True)
class ExpenseRecord:
    """Expense recorded upstream and passed in read-only"""

    id: str
    amount: Decimal
    category: str
    description: str
    date: datetime


@dataclass(frozen=True)
class Insight:
    """Single AI-generated observation about spending"""

    id: str
    type: InsightType
    title: str
    message: str
    confidence: float
    action: Optional[str] = None


@dataclass(frozen=True)
class ChatMessage:
    """Role-tagged message sent to the chat-completion service"""

    role: str  # "system" or "user"
    content: str


@dataclass(frozen=True)
class ChatRequest:
    """The only request shape the core sends to the hosted model"""

    model: str
    messages: Tuple[ChatMessage, ...]
    temperature: float
    max_tokens: int

    def as_payload(self) -> List[dict]:
        """Messages in the wire shape expected by chat-completion APIs"""
        return [{"role": m.role, "content": m.content} for m in self.messages]


@dataclass(frozen=True)
class AIResult(Generic[T]):
    """
    Outcome of an AI operation.

    A degraded result carries the fixed fallback value and the reason the
    genuine answer could not be produced. The value is usable either way.
    """

    value: T
    degraded: bool = False
    reason: Optional[str] = field(default=None, compare=False)

    @classmethod
    def success(cls, value: T) -> "AIResult[T]":
        return cls(value=value)

    @classmethod
    def fallback(cls, value: T, reason: str) -> "AIResult[T]":
        return cls(value=value, degraded=True, reason=reason)
