"""
AI project health insight.

Asks a text-generation model for a short executive summary of one project.
The summary is advisory only: any failure yields a fixed fallback string and
is logged, never raised.
"""
import json
import logging
from typing import Optional

import anthropic

from pms_dash.core.config import settings
from pms_dash.schemas.project import ProjectRead

logger = logging.getLogger(__name__)

FALLBACK_INSIGHT = "Insight generation currently unavailable."


def _amount(value: float):
    return int(value) if float(value).is_integer() else value


def build_prompt(project: ProjectRead) -> str:
    milestones = json.dumps([m.to_wire() for m in project.milestones])
    return (
        "Analyze the following project status and provide a concise (2-sentence) "
        "professional executive summary on its health.\n\n"
        f"Project: {project.name}\n"
        f"Category: {project.category.value}\n"
        f"Budget: {_amount(project.total_budget)}\n"
        f"Expenditure: {_amount(project.expenditure)}\n"
        f"Status: {project.status.value}\n"
        f"Remarks: {project.delay_remarks or 'None'}\n"
        f"Milestones: {milestones}"
    )


class InsightClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        client: Optional[anthropic.Anthropic] = None,
    ):
        self.api_key = api_key or settings.ANTHROPIC_API_KEY
        self.model = model or settings.INSIGHT_MODEL
        self.max_tokens = max_tokens or settings.INSIGHT_MAX_TOKENS
        self._client = client

    @property
    def client(self) -> Optional[anthropic.Anthropic]:
        if self._client is None and self.api_key:
            self._client = anthropic.Anthropic(api_key=self.api_key)
        return self._client

    def project_health(self, project: ProjectRead) -> str:
        """Return a two-sentence health summary, or the fallback text on any error."""
        if self.client is None:
            logger.warning("ANTHROPIC_API_KEY not set, skipping insight for %s", project.id)
            return FALLBACK_INSIGHT

        try:
            msg = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=0.7,
                messages=[{"role": "user", "content": build_prompt(project)}],
            )
        except anthropic.APIError as e:
            logger.warning("Insight request for %s failed: %s", project.id, e)
            return FALLBACK_INSIGHT

        try:
            text = "".join(
                block.text for block in msg.content if getattr(block, "type", None) == "text"
            ).strip()
        except (AttributeError, TypeError) as e:
            logger.warning("Malformed insight reply for %s: %s", project.id, e)
            return FALLBACK_INSIGHT

        if not text:
            logger.warning("Empty insight for %s", project.id)
            return FALLBACK_INSIGHT
        return text
