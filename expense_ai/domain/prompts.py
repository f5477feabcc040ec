"""Prompt builders for the chat-completion service"""

import json
from decimal import Decimal
from typing import Sequence

from expense_ai.domain.models import ChatMessage, ChatRequest, ExpenseCategory, ExpenseRecord

# Sampling parameters per operation
CATEGORIZATION_TEMPERATURE = 0.3
CATEGORIZATION_MAX_TOKENS = 30
INSIGHTS_TEMPERATURE = 0.7
INSIGHTS_MAX_TOKENS = 1000  # Room for 3-4 short insight objects
ANSWER_TEMPERATURE = 0.7
ANSWER_MAX_TOKENS = 200
CONNECTIVITY_TEMPERATURE = 0.1
CONNECTIVITY_MAX_TOKENS = 20

CATEGORY_HINTS = {
    ExpenseCategory.FOOD: "restaurants, groceries, coffee, snacks, dining",
    ExpenseCategory.TRANSPORTATION: "gas, uber, taxi, bus fare, parking, car maintenance",
    ExpenseCategory.ENTERTAINMENT: "movies, games, concerts, streaming services, books",
    ExpenseCategory.SHOPPING: "clothes, electronics, home goods, personal items",
    ExpenseCategory.BILLS: "utilities, rent, phone, internet, insurance, subscriptions",
    ExpenseCategory.HEALTHCARE: "doctor visits, medicine, pharmacy, medical supplies",
    ExpenseCategory.OTHER: "anything that doesn't fit the above categories",
}

CATEGORY_EXAMPLES = [
    ("coffee at starbucks", ExpenseCategory.FOOD),
    ("uber ride home", ExpenseCategory.TRANSPORTATION),
    ("netflix subscription", ExpenseCategory.ENTERTAINMENT),
    ("new shirt", ExpenseCategory.SHOPPING),
    ("electric bill", ExpenseCategory.BILLS),
    ("doctor appointment", ExpenseCategory.HEALTHCARE),
]

INSIGHTS_SYSTEM_PROMPT = (
    "You are a financial advisor AI that analyzes spending patterns and provides "
    "actionable insights. Always respond with valid JSON only."
)

ANSWER_SYSTEM_PROMPT = (
    "You are a helpful financial advisor AI that provides specific, actionable answers "
    "based on expense data. Be concise but thorough."
)


def _json_number(amount: Decimal) -> int | float:
    """Render a currency amount as a plain JSON number"""
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)


def serialize_expenses(expenses: Sequence[ExpenseRecord]) -> str:
    """
    Serialize expenses for embedding in a prompt.

    Only amount, category, description and date are sent; record IDs stay local.
    """
    summary = [
        {
            "amount": _json_number(expense.amount),
            "category": expense.category,
            "description": expense.description,
            "date": expense.date.isoformat(),
        }
        for expense in expenses
    ]
    return json.dumps(summary, indent=2, ensure_ascii=False)


def _categorization_system_prompt() -> str:
    lines = [f"- {category.value}: {hint}" for category, hint in CATEGORY_HINTS.items()]
    return (
        "You are an expense categorization AI. Analyze the expense description and "
        "categorize it into one of these categories:\n\n"
        + "\n".join(lines)
        + "\n\nRespond with ONLY the category name (exact match from the list above)."
    )


def build_categorization_request(description: str, model: str) -> ChatRequest:
    """Build the single-label categorization request for one description"""
    examples = "\n".join(f'- "{text}" → {category.value}' for text, category in CATEGORY_EXAMPLES)
    user_prompt = (
        f'Categorize this expense description: "{description}"\n\n'
        f"Examples:\n{examples}\n\n"
        "Category:"
    )
    return ChatRequest(
        model=model,
        messages=(
            ChatMessage(role="system", content=_categorization_system_prompt()),
            ChatMessage(role="user", content=user_prompt),
        ),
        temperature=CATEGORIZATION_TEMPERATURE,
        max_tokens=CATEGORIZATION_MAX_TOKENS,
    )


def build_insights_request(expenses: Sequence[ExpenseRecord], model: str) -> ChatRequest:
    """Build the request asking for a JSON array of insights"""
    user_prompt = f"""Analyze the following expense data and provide 3-4 actionable financial insights.
Return a JSON array of insights with this structure:
{{
  "type": "warning|info|success|tip",
  "title": "Brief title",
  "message": "Detailed insight message with specific numbers when possible",
  "action": "Actionable suggestion",
  "confidence": 0.8
}}

Expense Data:
{serialize_expenses(expenses)}

Focus on:
1. Spending patterns (day of week, categories)
2. Budget alerts (high spending areas)
3. Money-saving opportunities
4. Positive reinforcement for good habits

Return only valid JSON array, no additional text."""
    return ChatRequest(
        model=model,
        messages=(
            ChatMessage(role="system", content=INSIGHTS_SYSTEM_PROMPT),
            ChatMessage(role="user", content=user_prompt),
        ),
        temperature=INSIGHTS_TEMPERATURE,
        max_tokens=INSIGHTS_MAX_TOKENS,
    )


def build_answer_request(question: str, expenses: Sequence[ExpenseRecord], model: str) -> ChatRequest:
    """Build the request for a short free-text answer grounded in the expenses"""
    user_prompt = f"""Based on the following expense data, provide a detailed and actionable answer to this question: "{question}"

Expense Data:
{serialize_expenses(expenses)}

Provide a comprehensive answer that:
1. Addresses the specific question directly
2. Uses concrete data from the expenses when possible
3. Offers actionable advice
4. Keeps the response concise but informative (2-3 sentences)

Return only the answer text, no additional formatting."""
    return ChatRequest(
        model=model,
        messages=(
            ChatMessage(role="system", content=ANSWER_SYSTEM_PROMPT),
            ChatMessage(role="user", content=user_prompt),
        ),
        temperature=ANSWER_TEMPERATURE,
        max_tokens=ANSWER_MAX_TOKENS,
    )


def build_connectivity_request(model: str) -> ChatRequest:
    """Build the debug ping used to verify the service credential"""
    return ChatRequest(
        model=model,
        messages=(
            ChatMessage(role="system", content="You are a helpful assistant. Respond with a simple test message."),
            ChatMessage(role="user", content='Say "Hello from OpenRouter!" and nothing else.'),
        ),
        temperature=CONNECTIVITY_TEMPERATURE,
        max_tokens=CONNECTIVITY_MAX_TOKENS,
    )
