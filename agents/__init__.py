"""
Procurement Intelligence - Agents Package

Single-shot completion agents for proposal extraction, scoring, ranking and
RFP summarization.
"""

from agents.base import (
    LLMConfig,
    CompletionService,
    OpenAICompletionService,
    MalformedModelOutput,
    UpstreamServiceFailure,
)
from agents.proposal_extraction_agent import ProposalExtractionAgent
from agents.proposal_scoring_agent import (
    ProposalScoringAgent,
    extract_score,
    build_proposal_text,
)
from agents.proposal_ranking_agent import ProposalRankingAgent
from agents.rfp_summary_agent import RfpSummaryAgent, split_summary

__all__ = [
    "LLMConfig",
    "CompletionService",
    "OpenAICompletionService",
    "MalformedModelOutput",
    "UpstreamServiceFailure",
    "ProposalExtractionAgent",
    "ProposalScoringAgent",
    "extract_score",
    "build_proposal_text",
    "ProposalRankingAgent",
    "RfpSummaryAgent",
    "split_summary",
]
