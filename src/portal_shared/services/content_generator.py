"""AI-assisted text generation using the Strands framework.

Each generation runs on a fresh, tool-less agent so that no conversation
history leaks between guests or hotels.
"""

import os
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

from strands import Agent
from strands.models import BedrockModel

from portal_shared.models import (
    ConfirmationEmailInput,
    ConfirmationEmailOutput,
    SecurityPolicyInput,
    SecurityPolicyOutput,
)
from portal_shared.utils.logging import get_logger

logger = get_logger(__name__)

# Can be overridden via env var (tests use a cheaper model)
DEFAULT_MODEL_ID = "eu.anthropic.claude-haiku-4-5-20251001-v1:0"
DEFAULT_REGION = "eu-west-1"

PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"

_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*\n(.*?)\n?```\s*$", re.DOTALL)


class ContentGenerationError(Exception):
    """Raised when the language model returns no usable text."""

    pass


def _load_prompt(name: str) -> str:
    """Load a prompt template from the prompts directory."""
    return (PROMPTS_DIR / f"{name}.md").read_text(encoding="utf-8")


def _strip_code_fence(text: str) -> str:
    match = _CODE_FENCE.match(text.strip())
    return match.group(1).strip() if match else text.strip()


def create_text_agent() -> Agent:
    """Create a tool-less agent for one generation.

    Model ID and region can be overridden via BEDROCK_MODEL_ID and
    BEDROCK_REGION env vars.
    """
    bedrock_model = BedrockModel(
        model_id=os.environ.get("BEDROCK_MODEL_ID", DEFAULT_MODEL_ID),
        region_name=os.environ.get("BEDROCK_REGION", DEFAULT_REGION),
    )
    return Agent(
        model=bedrock_model,
        tools=[],
        system_prompt=_load_prompt("system_prompt"),
        callback_handler=None,  # no streaming to stdout
    )


class ContentGenerator:
    """Generates confirmation emails and security policy text."""

    def __init__(self, agent_factory: Callable[[], Any] | None = None) -> None:
        """Initialize content generator.

        Args:
            agent_factory: Returns a callable agent; defaults to create_text_agent.
        """
        self._agent_factory = agent_factory or create_text_agent

    def _generate(self, prompt: str) -> str:
        agent = self._agent_factory()
        result = agent(prompt)
        text = _strip_code_fence(str(result))
        if not text:
            raise ContentGenerationError("Language model returned an empty response")
        return text

    def generate_confirmation_email(
        self, data: ConfirmationEmailInput
    ) -> ConfirmationEmailOutput:
        """Write an HTML booking confirmation for a guest.

        Raises:
            ContentGenerationError: If the model returns nothing usable.
        """
        prompt = _load_prompt("confirmation_email").format(**data.model_dump())
        logger.info("Generating confirmation email for %s", data.hotel_name)
        return ConfirmationEmailOutput(html_content=self._generate(prompt))

    def generate_security_policy(
        self, data: SecurityPolicyInput
    ) -> SecurityPolicyOutput:
        """Recommend security policies for a hotel.

        Raises:
            ContentGenerationError: If the model returns nothing usable.
        """
        prompt = _load_prompt("security_policy").format(**data.model_dump())
        logger.info("Generating security policy for %s", data.hotel_name)
        return SecurityPolicyOutput(policy_recommendations=self._generate(prompt))
