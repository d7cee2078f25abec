# i18n_sync/translator_openai.py
from __future__ import annotations
import json, logging, random, time
from typing import Any, Dict, List, Optional

import requests

from .config import TranslateConfig
from .logger import LOGGER_NAME
from .translator_base import ChunkResult, Translator

COMPLETIONS_PATH = "/chat/completions"
RETRYABLE_STATUS = {429, 500, 502, 503, 504}

EXAMPLE = (
    'Example of valid responses: Text to translate: '
    '{ "link_text": "Link text", "invalid_email_error": "Invalid email format", "greeting": "Hello {{name}}" } '
    'Original language: "en-GB" Target language: "fr-FR" '
    'Response: { "link_text": "Texte du lien", "invalid_email_error": "Format email invalide", "greeting": "Bonjour {{name}}" }'
)


class TransientError(RuntimeError):
    pass


def build_messages(source_locale: str, target_locale: str, context: str, tone: str,
                   chunk: Dict[str, str]) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": (
            f"You are an expert in all languages, and you help translate texts from "
            f"{source_locale} to {target_locale}. {context}".rstrip()
        )},
        {"role": "system", "content": "Translate only the value, never change the key"},
        {"role": "system", "content": (
            "Leave every variable token written as {{name}} exactly as it is; never translate or rename it"
        )},
        {"role": "system", "content": f"Use {tone} language, be polite and succinct"},
        {"role": "system", "content": (
            'You reply only with a RFC8259 compliant JSON following this format without deviation: '
            '{"_key": "_value"} based on a JSON to translate. Return exactly the same keys. '
            'Do not include any other text or comments.'
        )},
        {"role": "system", "content": EXAMPLE},
        {"role": "user", "content": json.dumps(chunk, ensure_ascii=False)},
    ]


def _strip_code_fence(s: str) -> str:
    s = s.strip()
    if s.startswith("```"):
        for p in s.split("```"):
            p = p.strip()
            if p.startswith("json"):
                p = p[4:].strip()
            if p.startswith("{") and p.endswith("}"):
                return p
    return s


def _json_from_text(s: str) -> Any:
    s = _strip_code_fence(s)
    try:
        return json.loads(s)
    except json.JSONDecodeError:
        pass
    first, last = s.find("{"), s.rfind("}")
    if first != -1 and last > first:
        return json.loads(s[first:last + 1])
    return json.loads(s)


def parse_completion(data: Any, chunk: Dict[str, str]) -> Dict[str, str]:
    """Pull the translated map out of a chat-completion body; raises ValueError when unusable."""
    choices = data.get("choices") if isinstance(data, dict) else None
    if not choices:
        raise ValueError("AI was not able to analyse the text (no choices)")
    try:
        content = choices[0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        raise ValueError(f"Unexpected response: {str(data)[:200]}")
    parsed = _json_from_text(content or "")
    if not isinstance(parsed, dict):
        raise ValueError("Model did not return a JSON object")
    # keys outside the request and non-string values are dropped
    return {k: v for k, v in parsed.items() if k in chunk and isinstance(v, str)}


class OpenAITranslator(Translator):
    def __init__(self, cfg: TranslateConfig, logger: logging.Logger | None = None,
                 session: Optional[requests.Session] = None):
        self.cfg = cfg
        self.url = cfg.api_url.rstrip("/") + COMPLETIONS_PATH
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        # no shared Session by default: translate() runs on several worker threads at once
        self.session = session

    def _body(self, source_locale: str, target_locale: str, context: str, tone: str,
              chunk: Dict[str, str]) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "temperature": self.cfg.temperature,
            "max_tokens": self.cfg.max_tokens,
            "user": f"translation-automation-{source_locale}-{target_locale}",
            "response_format": {"type": "json_object"},
            "messages": build_messages(source_locale, target_locale, context, tone, chunk),
        }
        if self.cfg.model:
            body["model"] = self.cfg.model
        return body

    def _post(self, body: Dict[str, Any]) -> Any:
        headers = {"Content-Type": "application/json", "api-key": self.cfg.api_key}
        headers.update(self.cfg.extra_headers)
        try:
            post = self.session.post if self.session is not None else requests.post
            resp = post(self.url, headers=headers, json=body, timeout=self.cfg.timeout)
        except (requests.ConnectionError, requests.Timeout) as e:
            raise TransientError(str(e)) from e
        if resp.status_code in RETRYABLE_STATUS:
            raise TransientError(f"HTTP {resp.status_code}: {resp.text[:200]}")
        if not 200 <= resp.status_code < 300:
            raise RuntimeError(f"API request failed: HTTP {resp.status_code}: {resp.text[:200]}")
        return resp.json()

    def translate(self, source_locale: str, target_locale: str, context: str, tone: str,
                  chunk: Dict[str, str]) -> ChunkResult:
        if not chunk:
            return ChunkResult.success({})
        body = self._body(source_locale, target_locale, context, tone, chunk)
        attempts = max(self.cfg.max_retries, 1)
        for attempt in range(attempts):
            try:
                data = self._post(body)
                return ChunkResult.success(parse_completion(data, chunk))
            except TransientError as e:
                if attempt == attempts - 1:
                    return ChunkResult.failed(str(e))
                sleep = (self.cfg.backoff_base ** attempt) + random.uniform(0, 0.6)
                self.logger.warning(f"Translation request failed ({e}); retrying in {sleep:.1f}s")
                time.sleep(sleep)
            except (RuntimeError, ValueError, requests.RequestException) as e:
                return ChunkResult.failed(str(e))
        return ChunkResult.failed("no attempts made")
