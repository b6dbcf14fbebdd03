"""
Gemini assistant: narrative analysis of cutting parameters and spoken results.

Both services consume a finished calculation and never feed back into it.
Requests are retried with exponential backoff; a persistent failure raises
AssistantError, which callers treat as "feature unavailable".

Example:
    >>> settings = Settings.from_env()
    >>> async with GeminiAssistant(settings) as assistant:
    ...     text = await assistant.summarize(params, result)
    ...     mp3 = await assistant.speak_result(result)
"""

import asyncio
import base64
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, TYPE_CHECKING

import httpx

from ..calculator.output import format_motor_power
from ..config import Settings
from .retry import retry_with_backoff

if TYPE_CHECKING:
    from ..calculator.core import CalculationResult
    from ..io.loaders import CuttingParameters

logger = logging.getLogger(__name__)

ANALYSIS_FALLBACK_TEXT = "Failed to generate analysis."

SYSTEM_PROMPT = """You are a production engineer specialised in machining. Your task is to analyse a set of peripheral milling parameters and give a concise summary (in {language}).

FORMATTING RULES:
- Do NOT use LaTeX, Markdown or any special formatting for variables (such as $, \\, ^).
- Use only plain-text abbreviations for variables:
  - Cutting speed: 'vc'
  - Feed per tooth: 'fz'
  - Radial width of cut: 'ae'
  - Axial depth of cut: 'ap'
  - Diameter: 'D'
  - Motor power: 'Pm'
- The summary must have at most 4 short paragraphs.

Assess:
1. Whether the parameters (vc, fz) suit the given material.
2. The relation between the radial width of cut (ae) and the cutter diameter (D).
3. One simple optimisation (raising or lowering a parameter) to improve productivity or tool life.

Use only the information provided and your technical knowledge. Do not mention the values of kc1.1 or 1-mc."""

SPEECH_TEMPLATE = "A potência do motor calculada é de {power} quilowatts."


class AssistantError(RuntimeError):
    """An assistant feature is unavailable (missing key, service failure, bad response)."""


def build_analysis_query(params: "CuttingParameters", motor_power_text: str) -> str:
    """User message for the analysis request."""
    return (
        "Peripheral milling parameter analysis:\n"
        f"Material: {params.material_name or 'unspecified'}, D: {params.D:g}mm, Z: {params.Z:g}, "
        f"ae: {params.ae:g}mm, ap: {params.ap:g}mm, vc: {params.vc:g}m/min, fz: {params.fz:g}mm, "
        f"Pm: {motor_power_text}"
    )


def extract_candidate_text(response: Dict[str, Any]) -> Optional[str]:
    """Text of the first candidate part, or None if the response has none."""
    try:
        return response["candidates"][0]["content"]["parts"][0]["text"] or None
    except (KeyError, IndexError, TypeError):
        return None


class GeminiAssistant:
    """Async client for the Gemini analysis and speech endpoints."""

    def __init__(
        self,
        settings: Settings,
        client: Optional[httpx.AsyncClient] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        self.settings = settings
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=settings.timeout_s)
        self._post = retry_with_backoff(
            max_attempts=settings.retry_attempts,
            base_delay=settings.retry_base_delay_s,
            jitter=settings.retry_jitter_s,
            sleep=sleep or asyncio.sleep,
        )(self._post_once)

    async def __aenter__(self) -> "GeminiAssistant":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _require_key(self) -> str:
        if not self.settings.gemini_api_key:
            raise AssistantError("A Gemini API key is required for the AI features (set GEMINI_API_KEY)")
        return self.settings.gemini_api_key

    async def _post_once(self, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = await self._client.post(
            url,
            params={'key': self.settings.gemini_api_key},
            json=payload,
        )
        response.raise_for_status()
        return response.json()

    async def _request(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        self._require_key()
        url = f"{self.settings.gemini_base_url}{endpoint}"
        try:
            return await self._post(url, payload)
        except httpx.HTTPError as e:
            raise AssistantError(f"Error communicating with the AI service: {e}") from e
        except ValueError as e:
            raise AssistantError(f"AI service returned invalid JSON: {e}") from e

    async def summarize(self, params: "CuttingParameters", result: "CalculationResult") -> str:
        """
        Ask for a short narrative analysis of the cutting parameters.

        Raises:
            AssistantError: If the calculation has not succeeded, or the service fails
        """
        if not result.ok:
            raise AssistantError("Run a successful power calculation before requesting an analysis")

        payload = {
            'contents': [{'parts': [{'text': build_analysis_query(params, format_motor_power(result))}]}],
            'systemInstruction': {
                'parts': [{'text': SYSTEM_PROMPT.format(language=self.settings.summary_language)}]
            },
        }
        data = await self._request(f"{self.settings.llm_model}:generateContent", payload)
        text = extract_candidate_text(data)
        if text is None:
            logger.warning("Analysis response had no candidate text")
            return ANALYSIS_FALLBACK_TEXT
        return text

    async def synthesize_speech(self, text: str, language_code: Optional[str] = None) -> bytes:
        """
        Synthesize speech for a short text.

        Returns:
            MP3 audio bytes

        Raises:
            AssistantError: If the service fails or returns no audio
        """
        payload = {
            'input': {'text': text},
            'voice': {'languageCode': language_code or self.settings.speech_language},
            'audioConfig': {'audioEncoding': 'MP3'},
        }
        data = await self._request(f"{self.settings.tts_model}:synthesizeSpeech", payload)
        audio = data.get('audioContent') if isinstance(data, dict) else None
        if not audio:
            raise AssistantError("Invalid speech response: no audio content")
        try:
            return base64.b64decode(audio, validate=True)
        except ValueError as e:
            raise AssistantError(f"Invalid speech response: {e}") from e

    async def speak_result(self, result: "CalculationResult") -> bytes:
        """Synthesize the headline motor power. Only available for a successful result."""
        if not result.ok:
            raise AssistantError("No motor power to speak: the calculation failed")
        power = format_motor_power(result).removesuffix(" kW")
        return await self.synthesize_speech(SPEECH_TEMPLATE.format(power=power))
