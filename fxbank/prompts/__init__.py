from .banking_prompts import PROMPT_METADATA, BankingPrompts, PromptName  # noqa: F401
