"""
Proposal Extraction Agent

Turns a free-form vendor email into the four structured proposal fields.
Only runtime types are checked; domain plausibility is not.
"""

import logging

from agents.base import (
    CompletionService,
    load_json_object_or_empty,
    number_or_none,
    string_or_none,
)
from schemas.proposal import ExtractionResult

logger = logging.getLogger("procurement.agents.extraction")


PROPOSAL_EXTRACTION_SYSTEM_PROMPT = (
    "Extract price, delivery days, payment terms, and warranty from vendor emails. "
    "Return clean JSON only."
)


def build_extraction_messages(email_body: str) -> list[dict]:
    """Build the message sequence for one extraction call."""
    return [
        {"role": "system", "content": PROPOSAL_EXTRACTION_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": f"""
Vendor email:
---
{email_body}
---

Extract these fields:

- totalPrice (number only)
- deliveryDays (number)
- paymentTerms (string)
- warrantyYears (number)

If missing, set to null.

Return JSON ONLY.
""",
        },
    ]


class ProposalExtractionAgent:
    """Extracts an ExtractionResult from vendor correspondence."""

    def __init__(self, completion: CompletionService):
        self.completion = completion

    async def extract(self, email_body: str) -> ExtractionResult:
        """
        Extract structured proposal fields from an email body.

        Completion failures propagate; malformed output yields all-null fields.
        """
        output = await self.completion.complete(
            build_extraction_messages(email_body),
            json_object=True
        )
        data = load_json_object_or_empty(output, "proposal extraction")

        result = ExtractionResult(
            total_price=number_or_none(data.get("totalPrice")),
            delivery_days=number_or_none(data.get("deliveryDays")),
            payment_terms=string_or_none(data.get("paymentTerms")),
            warranty_years=number_or_none(data.get("warrantyYears")),
        )
        logger.debug(f"Extracted proposal fields: {result.model_dump(by_alias=True)}")
        return result
