"""Prompt templates for the generation service."""

from __future__ import annotations

SYSTEM_PROMPT_TEMPLATE = """\
You are an expert career assistant. Your task is to write a professional, \
specific, and concise cover letter in {language}. The cover letter must not \
exceed {max_chars} characters. It should be written as a complete text, \
without any placeholders for the user to fill in. It must sound natural and \
human-written."""

USER_PROMPT_TEMPLATE = """\
Based on my professional profile below, write a tailored cover letter for the \
job description that follows.

### My Profile:
{profile_text}

### Job Description:
{description}"""


def build_system_prompt(*, language: str, max_chars: int) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(language=language, max_chars=max_chars)


def build_user_prompt(*, profile_text: str, description: str) -> str:
    return USER_PROMPT_TEMPLATE.format(profile_text=profile_text, description=description)
