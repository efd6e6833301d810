from typing import Optional
from pydantic import ConfigDict, Field
from .base import BaseSchema

class TranslateRequest(BaseSchema):
    """Запрос перевода"""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    text: Optional[str] = None
    target_lang: Optional[str] = Field(None, alias="targetLang")
    use_free: bool = Field(False, alias="useFree")

class TranslateResponse(BaseSchema):
    """Результат перевода"""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    translated_text: str = Field(..., alias="translatedText")
