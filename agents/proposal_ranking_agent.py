"""
Proposal Ranking Agent

Compares every proposal for an RFP and recommends a vendor. The comparison
itself is delegated to the model; this module only frames the request and
fills in defaults for whatever the reply leaves out.
"""

import json
import logging
from typing import Any

from agents.base import CompletionService, load_json_object_or_empty
from schemas.proposal import RankingResult

logger = logging.getLogger("procurement.agents.ranking")


PROPOSAL_RANKING_SYSTEM_PROMPT = (
    "Compare vendor proposals and recommend the best one. Return JSON summary."
)

RANKING_OUTPUT_SHAPE = """{
  "summary": "string",
  "recommendedVendorName": "string or null",
  "recommendedVendorId": number or null,
  "reasoning": "string",
  "rankedVendors": [
    { "vendorId": number, "vendorName": "string", "score": number, "notes": "string" }
  ]
}"""


def build_ranking_messages(rfp: dict, proposals: list[dict]) -> list[dict]:
    """
    Build the message sequence for one ranking call.

    Args:
        rfp: RFP fields (id, title, description, budget, ...)
        proposals: One dict per proposal with vendor name/email denormalized
    """
    proposal_view = [
        {
            "id": p.get("id"),
            "vendorName": p.get("vendor_name"),
            "vendorEmail": p.get("vendor_email"),
            "totalPrice": p.get("total_price"),
            "deliveryDays": p.get("delivery_days"),
            "paymentTerms": p.get("payment_terms"),
            "warrantyYears": p.get("warranty_years"),
        }
        for p in proposals
    ]

    return [
        {"role": "system", "content": PROPOSAL_RANKING_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": f"""
RFP:
{json.dumps(rfp, indent=2, default=str)}

Proposals:
{json.dumps(proposal_view, indent=2, default=str)}

Return JSON:
{RANKING_OUTPUT_SHAPE}
""",
        },
    ]


def _default(data: dict, key: str, fallback: Any) -> Any:
    value = data.get(key)
    return fallback if value is None else value


def coerce_ranking(data: dict) -> RankingResult:
    """Default each top-level key independently; entries pass through untouched."""
    ranked = data.get("rankedVendors")
    return RankingResult(
        summary=_default(data, "summary", ""),
        recommended_vendor_name=data.get("recommendedVendorName"),
        recommended_vendor_id=data.get("recommendedVendorId"),
        reasoning=_default(data, "reasoning", ""),
        ranked_vendors=ranked if isinstance(ranked, list) else [],
    )


class ProposalRankingAgent:
    """Ranks all proposals submitted for one RFP."""

    def __init__(self, completion: CompletionService):
        self.completion = completion

    async def rank(self, rfp: dict, proposals: list[dict]) -> RankingResult:
        logger.info(f"Ranking {len(proposals)} proposal(s) for RFP {rfp.get('id')}")

        output = await self.completion.complete(
            build_ranking_messages(rfp, proposals),
            json_object=True
        )
        return coerce_ranking(load_json_object_or_empty(output, "proposal ranking"))
