from fastapi import FastAPI, HTTPException, Request
import json
import re
import time

app = FastAPI(title="Mock Chat Completion Server", version="1.0.0")

KEYWORDS = {
    "Food": ["coffee", "starbucks", "restaurant", "grocer", "lunch", "dinner", "pizza"],
    "Transportation": ["uber", "lyft", "taxi", "gas", "parking", "bus", "train"],
    "Entertainment": ["netflix", "movie", "concert", "game", "spotify", "book"],
    "Shopping": ["shirt", "shoes", "amazon", "electronics", "clothes"],
    "Bills": ["bill", "rent", "internet", "phone", "insurance", "electric"],
    "Healthcare": ["doctor", "pharmacy", "medicine", "dentist", "clinic"],
}

INSIGHTS = [
    {"type": "warning", "title": "Transportation Spending", "message": "Rides are your largest expense this week.", "action": "Try public transit twice a week", "confidence": 0.85},
    {"type": "tip", "title": "Coffee Habit", "message": "Daily coffee adds up over a month.", "action": "Brew at home on weekdays", "confidence": 0.75},
    {"type": "success", "title": "Shopping Under Control", "message": "Shopping stayed below your usual level.", "action": "Keep it up", "confidence": 0.7},
]


def completion(content: str, model: str) -> dict:
    return {
        "id": f"mock-{int(time.time() * 1000)}",
        "object": "chat.completion",
        "created": int(time.time()),
        "model": model,
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 0, "completion_tokens": 0, "total_tokens": 0},
    }


def categorize(user_prompt: str) -> str:
    match = re.search(r'Categorize this expense description: "(.*)"', user_prompt)
    description = (match.group(1) if match else "").lower()
    for category, words in KEYWORDS.items():
        if any(word in description for word in words):
            return category
    return "Other"


@app.get("/health")
def health(): return {"status": "ok"}

@app.post("/chat/completions")
async def chat_completions(request: Request):
    if not request.headers.get("authorization", "").startswith("Bearer "):
        raise HTTPException(status_code=401, detail="missing credential")
    body = await request.json()
    system = body["messages"][0]["content"]
    user = body["messages"][-1]["content"]
    model = body.get("model", "mock")

    if "categorization" in system:
        return completion(categorize(user), model)
    if "valid JSON" in system:
        return completion("```json\n" + json.dumps(INSIGHTS, indent=2) + "\n```", model)
    if "Hello from OpenRouter" in user:
        return completion("Hello from OpenRouter!", model)
    return completion("Your biggest category is Transportation. Cutting two rides a week would save about $40.", model)
