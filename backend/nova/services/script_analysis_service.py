"""Client for the hosted LLM that breaks a screenplay down into scenes"""

import json
import logging
import re
import time
from typing import Any, List, Optional

import httpx
from fastapi import status

from nova.config import settings
from nova.monitoring.metrics import metrics_collector
from nova.services.exceptions import NovaServiceError

logger = logging.getLogger(__name__)


class ScriptAnalysisError(NovaServiceError):
    """Base exception for script analysis failures"""

    status_code = status.HTTP_502_BAD_GATEWAY
    title = "Script Analysis Failed"


class ScriptAnalysisConfigError(ScriptAnalysisError):
    """No API key configured for the AI service"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    title = "Configuration Error"


class ScriptAnalysisRateLimitError(ScriptAnalysisError):
    """AI service rejected the call with 429"""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    title = "Rate Limited"


class ScriptAnalysisQuotaError(ScriptAnalysisError):
    """AI service credits exhausted (402)"""

    status_code = status.HTTP_402_PAYMENT_REQUIRED
    title = "Quota Exhausted"


class ScriptAnalysisRequestError(ScriptAnalysisError):
    """Any other non-2xx answer or transport failure"""


class ScriptParseError(ScriptAnalysisError):
    """Model output was empty, not JSON, or not a JSON array"""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    title = "Invalid AI Response"


PROMPT_TEMPLATE = """CRITICAL INSTRUCTIONS:
1. Return ONLY valid JSON - no explanations, no markdown, no code blocks
2. Keep ALL field values SHORT (max 80 characters each)
3. Replace double quotes in content with single quotes
4. Be concise and direct

SCRIPT TO ANALYZE:
{script}

Return a JSON array with these fields for each scene (keep brief):
- scene_number: number
- heading: brief scene heading
- location_type: INT or EXT
- specific_location: location name
- time_of_day: DAY/NIGHT/EVENING/etc
- characters_present: character names only
- speaking_roles: speaking character names
- extras: extras description
- functional_props: key props list
- decorative_props: decorative items
- camera_movement: camera description
- framing: shot framing
- lighting: lighting description
- lighting_mood: lighting mood
- diegetic_sounds: sounds in scene
- scene_mood: emotional mood
- emotional_arc: emotion progression
- primary_action: main action
- pacing: scene pacing
- shoot_type: interior/exterior/etc
- content: scene dialogue and action (use single quotes only)"""

_FENCE_START = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_END = re.compile(r"\s*```$")


def truncate_script(script_text: str, max_chars: Optional[int] = None) -> tuple[str, bool]:
    """Cut the script to the analysis limit; returns (text, was_truncated)"""
    limit = max_chars if max_chars is not None else settings.script_max_chars
    if len(script_text) <= limit:
        return script_text, False
    return script_text[:limit], True


def build_prompt(script_text: str) -> str:
    return PROMPT_TEMPLATE.format(script=script_text)


def strip_code_fences(text: str) -> str:
    """Remove a leading ```json / ``` fence and a trailing ``` fence"""
    cleaned = text.strip()
    cleaned = _FENCE_START.sub("", cleaned)
    cleaned = _FENCE_END.sub("", cleaned)
    return cleaned.strip()


def parse_scene_array(text: Optional[str]) -> List[Any]:
    """
    Parse model output into a list of scene objects.

    Raises:
        ScriptParseError: If text is empty, not JSON, or not a JSON array
    """
    if not text or not text.strip():
        raise ScriptParseError("No content returned from AI")

    try:
        parsed = json.loads(strip_code_fences(text))
    except json.JSONDecodeError as e:
        logger.error(f"AI response is not valid JSON: {e}")
        raise ScriptParseError("Invalid response format from AI")

    if not isinstance(parsed, list):
        logger.error(f"AI response is a {type(parsed).__name__}, expected an array")
        raise ScriptParseError("Invalid response format from AI")

    return parsed


class ScriptAnalysisService:
    """
    One-shot call to the Gemini generateContent endpoint.
    Never retries; the caller decides whether to ask the user to try again.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model = model or settings.gemini_model
        self.base_url = (base_url or settings.gemini_api_base_url).rstrip("/")
        self.timeout_seconds = (
            timeout_seconds
            if timeout_seconds is not None
            else settings.script_analysis_timeout_seconds
        )
        self.transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def _request_body(self, prompt: str) -> dict:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": 0.2,
                "maxOutputTokens": 8192,
                "responseMimeType": "application/json",
            },
        }

    @staticmethod
    def _extract_text(data: dict) -> Optional[str]:
        try:
            return data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return None

    async def analyze(self, script_text: str) -> List[Any]:
        """
        Send the script, cut to the analysis limit, and return the raw scene objects.

        Raises:
            ScriptAnalysisConfigError: No API key
            ScriptAnalysisRateLimitError: 429 from the service
            ScriptAnalysisQuotaError: 402 from the service
            ScriptAnalysisRequestError: Other HTTP or transport failure
            ScriptParseError: Unusable model output
        """
        if not self.api_key:
            logger.error("Script analysis requested but GEMINI_API_KEY is not set")
            raise ScriptAnalysisConfigError("AI service not configured")

        limited, _ = truncate_script(script_text)

        start_time = time.time()
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self.transport
            ) as client:
                response = await client.post(
                    self.endpoint,
                    params={"key": self.api_key},
                    json=self._request_body(build_prompt(limited)),
                )
        except httpx.HTTPError as e:
            metrics_collector.record_script_analysis("failed", time.time() - start_time)
            logger.error(f"AI service request failed: {e}")
            raise ScriptAnalysisRequestError("AI service request failed")

        duration = time.time() - start_time

        if response.status_code == 429:
            metrics_collector.record_script_analysis("rate_limited", duration)
            logger.warning("AI service rate limit exceeded")
            raise ScriptAnalysisRateLimitError("Rate limit exceeded. Please try again later.")

        if response.status_code == 402:
            metrics_collector.record_script_analysis("quota_exhausted", duration)
            logger.error("AI service credits exhausted")
            raise ScriptAnalysisQuotaError("AI credits exhausted. Please add credits to continue.")

        if response.is_error:
            metrics_collector.record_script_analysis("failed", duration)
            logger.error(f"AI service error {response.status_code}: {response.text[:500]}")
            raise ScriptAnalysisRequestError("AI service request failed")

        try:
            data = response.json()
        except ValueError:
            data = {}

        try:
            scenes = parse_scene_array(self._extract_text(data))
        except ScriptParseError:
            metrics_collector.record_script_analysis("parse_error", duration)
            raise

        metrics_collector.record_script_analysis("success", duration)
        logger.info(f"AI returned {len(scenes)} scenes in {duration:.1f}s")
        return scenes
