MAX_DIFF_CHARS = 3072
TRUNCATION_MARKER = "\n... (truncated)"

COMMIT_KINDS = ("feat", "fix", "docs", "style", "refactor", "test", "chore")
MESSAGE_MAX_CHARS = 50

API_KEY_ENV_VAR = "OPENAI_API_KEY"
BASE_URL_ENV_VAR = "OPENAI_BASE_URL"
MODEL_ENV_VAR = "OPENAI_MODEL"

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4.1-mini"
DEFAULT_TEMPERATURE = 0.0

SCHEMA_NAME = "commit_message"
USER_PROMPT_PREFIX = "Changes:\n"

SYSTEM_PROMPT = f"""You are a git commit message generator.
Analyze changes and output JSON with:
- type: {"|".join(COMMIT_KINDS)}
- scope: affected component (optional)
- message: clear description ({MESSAGE_MAX_CHARS} chars max)
Return ONLY valid JSON, no other text."""
