from typing import Any, Dict

from config.constant import ISSUE_CATEGORIES

REVIEW_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "issues": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "line": {"type": "integer"},
                    "type": {"type": "string"},
                    "message": {"type": "string"},
                },
                "required": ["line", "type", "message"],
                "additionalProperties": False,
            },
        },
        "suggestions": {
            "type": "array",
            "items": {"type": "string"},
        },
        "score": {
            "type": "integer",
            "description": "An integer from 0 to 100 representing overall code quality.",
        },
        "editedCode": {
            "type": "string",
            "description": "The full, corrected, and improved version of the user's code.",
        },
    },
    "required": ["issues", "suggestions", "score", "editedCode"],
    "additionalProperties": False,
}


def review_response_format() -> Dict[str, Any]:
    """Structured-output contract passed to the chat completion call."""
    return {
        "type": "json_schema",
        "json_schema": {
            "name": "code_review",
            "strict": True,
            "schema": REVIEW_RESPONSE_SCHEMA,
        },
    }


def review_system_prompt() -> str:
    return (
        "You are Bugless, a world-class senior software engineer AI specializing in code reviews. "
        "You always answer with a single JSON object that matches the provided schema."
    )


def build_review_prompt(language: str, code: str) -> str:
    categories = ", ".join(f"'{c}'" for c in ISSUE_CATEGORIES)
    return f"""Your task is to provide a comprehensive, professional-grade review of the following {language} code.

Analyze the code for the following aspects:
1.  **Logic:** Identify any logical errors, edge cases not handled, or potential bugs.
2.  **Performance:** Spot any performance bottlenecks, inefficient algorithms, or memory leaks.
3.  **Readability & Style:** Check for adherence to best practices, clarity, naming conventions, and code smells.
4.  **Security:** Find potential security vulnerabilities.

Your response MUST be in a valid JSON format that strictly adheres to the provided schema. Do not add any text or formatting outside of the JSON structure.

The "type" in an issue must be one of: {categories}.

Provide a concise, high-level summary of suggestions for architectural or structural improvements.
Give an overall score from 0 to 100, where 100 is perfect code.

Finally, and most importantly, provide the complete, corrected version of the code in the "editedCode" field. This version should incorporate the most critical suggestions for logic, performance, and readability. It must be well-formatted with proper indentation according to {language} conventions, resulting in a production-quality implementation.

Code to review:
```{language}
{code}
```
"""
