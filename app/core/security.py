from __future__ import annotations

from fastapi import HTTPException, status

from app.core.config import settings


def _normalize_lang(lang: str | None) -> str:
    if not lang:
        return "es"
    return lang.split(",")[0].split("-")[0].strip().lower()


def _auth_error_message(lang: str | None) -> str:
    key = _normalize_lang(lang)
    messages = {
        "es": "Por favor, proporciona una clave API válida para analizar el charter.",
        "en": "Please provide a valid API key to analyze the charter.",
    }
    return messages.get(key, messages["es"])


def check_api_key(x_api_key: str | None, lang: str | None = None) -> None:
    if not settings.api_key:
        return
    if x_api_key != settings.api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=_auth_error_message(lang),
        )
