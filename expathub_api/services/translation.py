# expathub_api/services/translation.py
"""
Прокси перевода: бесплатный Google Translate или OpenAI
"""

import logging
from typing import Any, Dict, Optional

import httpx
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_exponential

from expathub_shared.config import config
from ..exceptions import TranslationError, TranslationNotConfiguredError

logger = logging.getLogger(__name__)

FREE_LANG_CODES = {"ko": "ko", "en": "en", "ja": "ja", "zh": "zh-CN", "vi": "vi"}
LANG_NAMES = {
    "ko": "Korean",
    "en": "English",
    "ja": "Japanese",
    "zh": "Chinese",
    "vi": "Vietnamese",
}
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

SYSTEM_PROMPT = """You are a professional translator. Translate the following text to {language}.
Only output the translated text, nothing else.
Maintain the original tone and style.
If the text is already in {language}, return it as is."""


def _is_transient(error: BaseException) -> bool:
    """Сетевые ошибки и 5xx стоит повторить, 4xx - нет"""
    if isinstance(error, httpx.TransportError):
        return True
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code >= 500
    return False


def parse_free_response(data: Any) -> Optional[str]:
    """Ответ вида [[["перевод", "оригинал", null, null, 10], ...], null, "en"]"""
    if not data or not isinstance(data, list) or not data[0]:
        return None
    chunks = [item[0] for item in data[0] if isinstance(item, list) and item and item[0]]
    return "".join(chunks) or None


class TranslationService:
    """Сервис перевода текстов отзывов и постов"""
    
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        free_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        max_input: Optional[int] = None,
        retry_wait: float = 0.5,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else config.OPENAI_API_KEY
        self.base_url = (base_url or config.clean_openai_base_url).rstrip('/')
        self.model = model or config.OPENAI_MODEL
        self.free_url = free_url or config.TRANSLATE_FREE_URL
        self.timeout = timeout or config.TRANSLATE_TIMEOUT
        self.max_retries = max_retries or config.TRANSLATE_MAX_RETRIES
        self.max_input = max_input or config.TRANSLATE_MAX_INPUT
        self.retry_wait = retry_wait
        self.transport = transport
    
    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)
    
    async def _request(self, client: httpx.AsyncClient, method: str, url: str, **kwargs) -> httpx.Response:
        """HTTP запрос с повторами при временных ошибках"""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=self.retry_wait, max=5),
            retry=retry_if_exception(_is_transient),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.warning(f"Retrying {method} {url} (attempt {attempt.retry_state.attempt_number})")
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
                return response
    
    async def translate_free(self, text: str, target_lang: str) -> Optional[str]:
        """Бесплатный перевод через неофициальный API Google"""
        params = {
            "client": "gtx",
            "sl": "auto",
            "tl": FREE_LANG_CODES.get(target_lang, "en"),
            "dt": "t",
            "q": text[:self.max_input],
        }
        try:
            async with self._client() as client:
                response = await self._request(
                    client, "GET", self.free_url,
                    params=params,
                    headers={"User-Agent": USER_AGENT},
                )
                return parse_free_response(response.json())
        except httpx.HTTPError as e:
            logger.error(f"Google Translate error: {e}")
        except ValueError as e:
            logger.error(f"Google Translate returned invalid JSON: {e}")
        return None
    
    async def translate_llm(self, text: str, target_lang: str) -> str:
        """Перевод через OpenAI chat completions"""
        if not self.api_key:
            raise TranslationNotConfiguredError("OpenAI API key is not set")
        
        language = LANG_NAMES.get(target_lang, "English")
        data: Dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT.format(language=language)},
                {"role": "user", "content": text},
            ],
            "temperature": 0.3,
            "max_tokens": 2000,
        }
        
        try:
            async with self._client() as client:
                response = await self._request(
                    client, "POST", f"{self.base_url}/chat/completions",
                    json=data,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
                result = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"OpenAI API error: {e.response.status_code} - {e.response.text[:200]}")
            raise TranslationError("OpenAI request failed") from e
        except httpx.HTTPError as e:
            logger.error(f"OpenAI request error: {e}")
            raise TranslationError("OpenAI request failed") from e
        except ValueError as e:
            raise TranslationError("OpenAI returned invalid JSON") from e
        
        choices = result.get("choices") or [{}]
        translated = ((choices[0].get("message") or {}).get("content") or "").strip()
        if not translated:
            raise TranslationError("OpenAI returned an empty translation")
        return translated
    
    async def translate(self, text: str, target_lang: str, use_free: bool = False) -> str:
        """Перевести текст; бросает TranslationError, если перевод не получен"""
        if use_free:
            translated = await self.translate_free(text, target_lang)
            if not translated:
                raise TranslationError("Free translation failed")
            return translated
        return await self.translate_llm(text, target_lang)
