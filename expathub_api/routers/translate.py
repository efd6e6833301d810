# expathub_api/routers/translate.py
"""
Роутер перевода
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_translation_service
from ..exceptions import TranslationError, TranslationNotConfiguredError
from ..schemas.translation import TranslateRequest, TranslateResponse
from ..services.translation import TranslationService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=TranslateResponse)
async def translate(
    body: TranslateRequest,
    service: TranslationService = Depends(get_translation_service),
):
    """Перевести текст на выбранный язык"""
    if not body.text or not body.target_lang:
        raise HTTPException(status_code=400, detail="text and targetLang are required")
    
    try:
        translated = await service.translate(body.text, body.target_lang, use_free=body.use_free)
    except TranslationNotConfiguredError:
        raise HTTPException(status_code=500, detail="OpenAI API key is not configured")
    except TranslationError as e:
        logger.warning(f"Translation failed: {e}")
        raise HTTPException(status_code=500, detail="Translation failed")
    
    return TranslateResponse(translated_text=translated)
