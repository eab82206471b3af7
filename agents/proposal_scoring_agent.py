"""
Proposal Scoring Agent

Asks the model to grade a proposal against an RFP in prose and pulls a
numeric score out of the reply.
"""

import logging
import re
from typing import Optional

from agents.base import CompletionService
from schemas.proposal import ExtractionResult, ProposalScore

logger = logging.getLogger("procurement.agents.scoring")


# First standalone run of 1-3 ASCII digits. Any earlier small number in the
# reply (an item count, a year fragment) wins over the actual score.
SCORE_PATTERN = re.compile(r"\b(\d{1,3})\b", re.ASCII)


def extract_score(text: str) -> Optional[int]:
    """Return the first standalone 1-3 digit number in text, unclamped."""
    match = SCORE_PATTERN.search(text or "")
    return int(match.group(1)) if match else None


def _or_na(value) -> str:
    if value is None:
        return "N/A"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_proposal_text(fields: ExtractionResult) -> str:
    """Render structured fields as the canonical text block used for scoring."""
    return "\n".join([
        f"Total price: {_or_na(fields.total_price)}",
        f"Delivery days: {_or_na(fields.delivery_days)}",
        f"Payment terms: {_or_na(fields.payment_terms)}",
        f"Warranty years: {_or_na(fields.warranty_years)}",
    ])


def build_scoring_prompt(rfp_text: str, proposal_text: str) -> str:
    return f"""
Evaluate this vendor proposal against the RFP.

RFP:
{rfp_text}

Proposal:
{proposal_text}

Return:
- Score (0-100)
- Short explanation
"""


class ProposalScoringAgent:
    """Scores one proposal against one RFP description."""

    def __init__(self, completion: CompletionService):
        self.completion = completion

    async def score(
        self,
        rfp_text: str,
        proposal_text: Optional[str] = None,
        fields: Optional[ExtractionResult] = None
    ) -> ProposalScore:
        """
        Score a proposal.

        Args:
            rfp_text: RFP description
            proposal_text: Raw proposal or email text
            fields: Structured fields, rendered as text when proposal_text is blank

        Returns:
            ProposalScore with the extracted score and the full model reply
        """
        if not proposal_text or not proposal_text.strip():
            proposal_text = build_proposal_text(fields or ExtractionResult())

        output = await self.completion.complete([
            {"role": "user", "content": build_scoring_prompt(rfp_text or "", proposal_text)}
        ])

        score = extract_score(output)
        if score is None:
            logger.warning("No score found in evaluation output")

        return ProposalScore(ai_score=score, ai_analysis=output)
