"""
Procurement Intelligence - Pipeline

Wires the four agents to one completion service. Each entry point issues
exactly one completion call and keeps no state between calls.
"""

import logging
from typing import Optional

from agents.base import CompletionService, LLMConfig, OpenAICompletionService
from agents.proposal_extraction_agent import ProposalExtractionAgent
from agents.proposal_scoring_agent import ProposalScoringAgent
from agents.proposal_ranking_agent import ProposalRankingAgent
from agents.rfp_summary_agent import RfpSummaryAgent
from schemas.proposal import ExtractionResult, ProposalScore, RankingResult
from schemas.rfp import RfpSummary

logger = logging.getLogger("procurement.pipeline")


class ProcurementPipeline:
    """
    Pipeline entry points consumed by the API layer.

    Usage:
        pipeline = ProcurementPipeline.from_config(settings.llm_config())
        fields = await pipeline.extract_proposal_fields(email_body)
    """

    def __init__(self, completion: CompletionService):
        self.completion = completion
        self.extractor = ProposalExtractionAgent(completion)
        self.scorer = ProposalScoringAgent(completion)
        self.ranker = ProposalRankingAgent(completion)
        self.summarizer = RfpSummaryAgent(completion)

    @classmethod
    def from_config(cls, config: LLMConfig) -> "ProcurementPipeline":
        """Build a pipeline backed by the OpenAI completion service."""
        logger.info(f"Initializing pipeline with model {config.model}")
        return cls(OpenAICompletionService(config))

    async def extract_proposal_fields(self, email_body: str) -> ExtractionResult:
        return await self.extractor.extract(email_body)

    async def score_proposal(
        self,
        rfp_description: str,
        proposal_text: Optional[str] = None,
        fields: Optional[ExtractionResult] = None
    ) -> ProposalScore:
        return await self.scorer.score(rfp_description, proposal_text, fields)

    async def rank_proposals(self, rfp: dict, proposals: list[dict]) -> RankingResult:
        return await self.ranker.rank(rfp, proposals)

    async def summarize_rfp(self, description: str) -> RfpSummary:
        return await self.summarizer.summarize(description)
