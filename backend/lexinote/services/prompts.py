"""
LexiNote Backend — Prompt Templates
=====================================

What:  The text prompt sent to the vendor for each task kind.
Who:   LLMService.run() via build_prompt(); identical for all three vendors.

The AnalyzeHardWords template asks for a JSON object. Nothing on the vendor
side enforces that shape; services/response_parser.py validates it.
"""

from lexinote.schemas.ai import (
    AnalyzeHardWordsTask,
    FindAlternativesTask,
    SimplifyTask,
    TaskRequest,
)

SIMPLIFY_PROMPT = (
    "Please simplify the following text while maintaining its meaning and context. "
    "Make it easier to understand without losing important information:\n\n{text}"
)

FIND_ALTERNATIVES_PROMPT = (
    'Find 3-5 simpler alternative words for "{word}" that would fit perfectly in this '
    'context: "{context}". Provide only the words separated by commas, no explanations.'
)

ANALYZE_HARD_WORDS_PROMPT = """Analyze this text and identify words that might be difficult to understand. For each hard word, provide simpler alternatives that fit the context. Format your response as JSON with this structure:
{{
  "hardWords": [
    {{
      "word": "original word",
      "alternatives": ["simpler word 1", "simpler word 2"],
      "context": "sentence containing the word"
    }}
  ]
}}

Text to analyze: {text}"""


def build_prompt(task: TaskRequest) -> str:
    """Render the prompt for one of the three task shapes."""
    if isinstance(task, SimplifyTask):
        return SIMPLIFY_PROMPT.format(text=task.text)
    if isinstance(task, FindAlternativesTask):
        return FIND_ALTERNATIVES_PROMPT.format(word=task.word, context=task.context)
    if isinstance(task, AnalyzeHardWordsTask):
        return ANALYZE_HARD_WORDS_PROMPT.format(text=task.text)
    raise TypeError(f"Unsupported task type: {type(task).__name__}")
