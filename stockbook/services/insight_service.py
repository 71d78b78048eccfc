from __future__ import annotations

import json
import os
from typing import Any, Optional, Sequence

import structlog
from openai import OpenAI, OpenAIError
from pydantic import TypeAdapter

from stockbook.schemas import Insight, Product
from stockbook.shop_config import AIConfig
from stockbook.translations import DEFAULT_LANGUAGE, label

logger = structlog.get_logger(__name__)

_insights_adapter = TypeAdapter(list[Insight])

_INSIGHTS_SYSTEM_PROMPT = (
    "You analyse the inventory of a small print and office-supplies shop. "
    "Answer only with a JSON object of the form "
    '{"insights": [{"title": str, "description": str, "recommendation": str, '
    '"priority": "low" | "medium" | "high"}]}.'
)

_LANGUAGE_NAMES = {"pt": "Portuguese", "en": "English", "fr": "French"}


def inventory_payload(products: Sequence[Product]) -> list[dict[str, Any]]:
    return [
        {"name": p.name, "stock": p.quantity, "min": p.min_stock, "category": p.category}
        for p in products
    ]


class InsightService:
    """Análisis y descripciones generadas por un modelo de lenguaje.

    Nunca propaga errores: cualquier fallo devuelve un valor de respaldo.
    """

    def __init__(
        self,
        config: Optional[AIConfig] = None,
        client: Optional[OpenAI] = None,
        language: str = DEFAULT_LANGUAGE,
    ):
        self._config = config or AIConfig()
        self._client = client
        self._language = language

    def _get_client(self) -> Optional[OpenAI]:
        if self._client is not None:
            return self._client

        api_key = (os.getenv("OPENAI_API_KEY") or "").strip()
        if not api_key:
            logger.warning("OPENAI_API_KEY not configured, AI features disabled")
            return None

        client_kwargs: dict[str, Any] = {"api_key": api_key, "timeout": self._config.timeout}
        if self._config.base_url:
            client_kwargs["base_url"] = self._config.base_url
        self._client = OpenAI(**client_kwargs)
        return self._client

    def fallback_insight(self) -> Insight:
        return Insight(
            title=label(self._language, "insight_error_title"),
            description=label(self._language, "insight_error_description"),
            recommendation=label(self._language, "insight_error_recommendation"),
            priority="medium",
        )

    def generate_insights(self, products: Sequence[Product]) -> list[Insight]:
        client = self._get_client()
        if client is None:
            return [self.fallback_insight()]

        prompt = (
            "Analyse this inventory and give strategic management insights. "
            "Consider items below minimum stock, trends and restocking suggestions. "
            f"Write in {_LANGUAGE_NAMES.get(self._language, 'Portuguese')}.\n"
            f"Data: {json.dumps(inventory_payload(products), ensure_ascii=False)}"
        )
        try:
            response = client.chat.completions.create(
                model=self._config.model,
                messages=[
                    {"role": "system", "content": _INSIGHTS_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
            )
            content = (response.choices[0].message.content or "").strip()
            data = json.loads(content)
            items = data.get("insights") if isinstance(data, dict) else data
            insights = _insights_adapter.validate_python(items)
            logger.info("AI insights generated", count=len(insights), model=self._config.model)
            return insights
        except OpenAIError as e:
            logger.error("AI insights request failed", error=str(e), error_type=type(e).__name__)
        except ValueError as e:
            logger.error("AI insights response unreadable", error=str(e))
        except Exception as e:
            logger.exception("Unexpected error generating AI insights", error=str(e))
        return [self.fallback_insight()]

    def generate_description(self, name: str, category: str) -> str:
        fallback = label(self._language, "description_unavailable")
        client = self._get_client()
        if client is None:
            return fallback

        prompt = (
            f'Write a short, professional description for a product called "{name}" '
            f'in the category "{category}" for an inventory system. Be concise. '
            f"Write in {_LANGUAGE_NAMES.get(self._language, 'Portuguese')}."
        )
        try:
            response = client.chat.completions.create(
                model=self._config.model,
                messages=[{"role": "user", "content": prompt}],
            )
            text = (response.choices[0].message.content or "").strip()
            return text or fallback
        except OpenAIError as e:
            logger.error("AI description request failed", error=str(e), error_type=type(e).__name__)
        except Exception as e:
            logger.exception("Unexpected error generating AI description", error=str(e))
        return fallback
