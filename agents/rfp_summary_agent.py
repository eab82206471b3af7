"""
RFP Summary Agent

Reduces an RFP description to a one-line summary and bullet key points.
"""

from agents.base import CompletionService
from schemas.rfp import RfpSummary


def build_summary_prompt(description: str) -> str:
    return f"""
Summarize this RFP and extract 4–6 bullet points.

RFP Description:
{description}
"""


def split_summary(text: str) -> RfpSummary:
    """
    Split completion text line by line.

    The first line is the summary, unvalidated even when blank. Every later
    line with non-whitespace content is a key point, kept in order.
    """
    lines = (text or "").split("\n")
    return RfpSummary(
        summary=lines[0],
        key_points=[line for line in lines[1:] if line.strip()],
    )


class RfpSummaryAgent:
    """Summarizes RFP descriptions."""

    def __init__(self, completion: CompletionService):
        self.completion = completion

    async def summarize(self, description: str) -> RfpSummary:
        output = await self.completion.complete([
            {"role": "user", "content": build_summary_prompt(description or "")}
        ])
        return split_summary(output)
