"""Tests for procurement workflows against a temporary SQLite database."""

import asyncio
import json

import pytest

from agents.base import UpstreamServiceFailure
from api.middleware.error_handler import (
    ConflictError,
    MissingInputError,
    NotFoundError,
    ReferenceNotFoundError,
)
from database.connection import get_session_factory, init_db, close_db
from pipeline import ProcurementPipeline
from schemas.proposal import ExtractionResult
from services.procurement_service import ProcurementService
from services.procurement_store import ProcurementStore


def run_scenario(scenario):
    """Run an async scenario against a fresh schema."""
    async def wrapper():
        await init_db()
        try:
            return await scenario(get_session_factory())
        finally:
            await close_db()
    return asyncio.run(wrapper())


async def seed(factory):
    async with factory() as db:
        store = ProcurementStore(db)
        rfp = await store.create_rfp("Laptops", "Supply 50 laptops within 30 days", 60000)
        vendor = await store.create_vendor("Acme", "sales@acme.test", "IT Hardware")
        return rfp.id, vendor.id


@pytest.mark.usefixtures("database")
class TestProposalCreation:

    def test_scored_proposal_persisted(self, scripted):
        completion = scripted("Score: 82. Great pricing.")

        async def scenario(factory):
            rfp_id, vendor_id = await seed(factory)
            async with factory() as db:
                service = ProcurementService(ProcurementStore(db), ProcurementPipeline(completion))
                return await service.create_scored_proposal(
                    rfp_id,
                    vendor_id,
                    ExtractionResult(total_price=50000, payment_terms=""),
                    raw_email_body="We can deliver 50 laptops for $50,000.",
                    items=[{"name": "laptop", "qty": 50}],
                )

        proposal = run_scenario(scenario)
        assert proposal.ai_score == 82
        assert proposal.ai_analysis == "Score: 82. Great pricing."
        assert proposal.total_price == 50000
        assert proposal.payment_terms is None
        assert proposal.vendor.name == "Acme"
        assert json.loads(proposal.items_json) == [{"name": "laptop", "qty": 50}]
        assert "We can deliver 50 laptops" in completion.prompt()
        assert "Supply 50 laptops within 30 days" in completion.prompt()

    def test_items_json_string_wins(self, scripted):
        async def scenario(factory):
            rfp_id, vendor_id = await seed(factory)
            async with factory() as db:
                service = ProcurementService(ProcurementStore(db), ProcurementPipeline(scripted("70")))
                return await service.create_scored_proposal(
                    rfp_id, vendor_id, ExtractionResult(),
                    items=[{"name": "ignored"}],
                    items_json='[{"name": "kept"}]',
                )

        proposal = run_scenario(scenario)
        assert proposal.items_json == '[{"name": "kept"}]'
        assert proposal.raw_email_body == ""

    def test_synthesized_text_without_email(self, scripted):
        completion = scripted("Score 75")

        async def scenario(factory):
            rfp_id, vendor_id = await seed(factory)
            async with factory() as db:
                service = ProcurementService(ProcurementStore(db), ProcurementPipeline(completion))
                return await service.create_scored_proposal(
                    rfp_id, vendor_id,
                    ExtractionResult(total_price=48000, delivery_days=20, warranty_years=3),
                )

        proposal = run_scenario(scenario)
        assert proposal.ai_score == 75
        prompt = completion.prompt()
        assert "Total price: 48000" in prompt
        assert "Delivery days: 20" in prompt
        assert "Payment terms: N/A" in prompt
        assert "Warranty years: 3" in prompt

    def test_unknown_rfp_rejected_before_completion(self, scripted):
        completion = scripted("Score 99")

        async def scenario(factory):
            _, vendor_id = await seed(factory)
            async with factory() as db:
                service = ProcurementService(ProcurementStore(db), ProcurementPipeline(completion))
                with pytest.raises(ReferenceNotFoundError):
                    await service.create_scored_proposal(999, vendor_id, ExtractionResult())
            async with factory() as db:
                return await ProcurementStore(db).list_proposals(999)

        assert run_scenario(scenario) == []
        assert completion.calls == []

    def test_unknown_vendor_rejected_before_completion(self, scripted):
        completion = scripted("Score 99")

        async def scenario(factory):
            rfp_id, _ = await seed(factory)
            async with factory() as db:
                service = ProcurementService(ProcurementStore(db), ProcurementPipeline(completion))
                with pytest.raises(ReferenceNotFoundError):
                    await service.create_from_email("Price $10", rfp_id, 999)

        run_scenario(scenario)
        assert completion.calls == []

    @pytest.mark.parametrize("rfp_id, vendor_id", [(None, 1), (1, None), (0, 1)])
    def test_missing_ids_rejected(self, scripted, rfp_id, vendor_id):
        completion = scripted("Score 99")

        async def scenario(factory):
            async with factory() as db:
                service = ProcurementService(ProcurementStore(db), ProcurementPipeline(completion))
                with pytest.raises(MissingInputError):
                    await service.create_scored_proposal(rfp_id, vendor_id, ExtractionResult())

        run_scenario(scenario)
        assert completion.calls == []

    def test_upstream_failure_persists_nothing(self, scripted):
        completion = scripted(UpstreamServiceFailure("connection reset"))

        async def scenario(factory):
            rfp_id, vendor_id = await seed(factory)
            async with factory() as db:
                service = ProcurementService(ProcurementStore(db), ProcurementPipeline(completion))
                with pytest.raises(UpstreamServiceFailure):
                    await service.create_scored_proposal(rfp_id, vendor_id, ExtractionResult())
            async with factory() as db:
                return await ProcurementStore(db).list_proposals(rfp_id)

        assert run_scenario(scenario) == []

    def test_concurrent_duplicates_both_persist(self, scripted):
        # No deduplication per (rfp, vendor): both submissions are stored.
        completion = scripted("Score: 60")

        async def scenario(factory):
            rfp_id, vendor_id = await seed(factory)
            pipeline = ProcurementPipeline(completion)

            async def submit():
                async with factory() as db:
                    service = ProcurementService(ProcurementStore(db), pipeline)
                    return await service.create_scored_proposal(
                        rfp_id, vendor_id, ExtractionResult(total_price=100)
                    )

            first, second = await asyncio.gather(submit(), submit())
            async with factory() as db:
                stored = await ProcurementStore(db).list_proposals(rfp_id)
            return first, second, stored

        first, second, stored = run_scenario(scenario)
        assert first.id != second.id
        assert len(stored) == 2
        assert {p.vendor_id for p in stored} == {first.vendor_id}
        assert len(completion.calls) == 2


@pytest.mark.usefixtures("database")
class TestEmailParsing:

    def test_extracted_fields_stored_unscored(self, scripted):
        completion = scripted(json.dumps({"totalPrice": 1200, "paymentTerms": "Net 30"}))

        async def scenario(factory):
            rfp_id, vendor_id = await seed(factory)
            async with factory() as db:
                service = ProcurementService(ProcurementStore(db), ProcurementPipeline(completion))
                return await service.create_from_email("Price $1200, Net 30", rfp_id, vendor_id)

        proposal, extracted = run_scenario(scenario)
        assert extracted.total_price == 1200
        assert extracted.delivery_days is None
        assert proposal.total_price == 1200
        assert proposal.payment_terms == "Net 30"
        assert proposal.raw_email_body == "Price $1200, Net 30"
        assert proposal.ai_score is None
        assert proposal.ai_analysis is None
        assert proposal.items_json is None

    def test_malformed_extraction_still_persists(self, scripted):
        async def scenario(factory):
            rfp_id, vendor_id = await seed(factory)
            async with factory() as db:
                service = ProcurementService(
                    ProcurementStore(db), ProcurementPipeline(scripted("not json"))
                )
                return await service.create_from_email("hello", rfp_id, vendor_id)

        proposal, extracted = run_scenario(scenario)
        assert proposal.id is not None
        assert proposal.total_price is None
        assert extracted.payment_terms is None

    def test_missing_email_body(self, scripted):
        completion = scripted("{}")

        async def scenario(factory):
            async with factory() as db:
                service = ProcurementService(ProcurementStore(db), ProcurementPipeline(completion))
                with pytest.raises(MissingInputError):
                    await service.create_from_email("", 1, 1)

        run_scenario(scenario)
        assert completion.calls == []


@pytest.mark.usefixtures("database")
class TestRankingAndSummary:

    def test_rank_for_rfp(self, scripted):
        ranking = {"summary": "Acme wins", "recommendedVendorId": 1, "rankedVendors": "oops"}
        completion = scripted("Score 80", json.dumps(ranking))

        async def scenario(factory):
            rfp_id, vendor_id = await seed(factory)
            async with factory() as db:
                service = ProcurementService(ProcurementStore(db), ProcurementPipeline(completion))
                await service.create_scored_proposal(
                    rfp_id, vendor_id, ExtractionResult(total_price=51000)
                )
                return await service.rank_for_rfp(rfp_id)

        result = run_scenario(scenario)
        assert result.summary == "Acme wins"
        assert result.recommended_vendor_id == 1
        assert result.recommended_vendor_name is None
        assert result.reasoning == ""
        assert result.ranked_vendors == []
        prompt = completion.prompt()
        assert '"vendorName": "Acme"' in prompt
        assert '"totalPrice": 51000' in prompt

    def test_rank_unknown_rfp(self, scripted):
        completion = scripted("{}")

        async def scenario(factory):
            async with factory() as db:
                service = ProcurementService(ProcurementStore(db), ProcurementPipeline(completion))
                with pytest.raises(NotFoundError):
                    await service.rank_for_rfp(42)

        run_scenario(scenario)
        assert completion.calls == []

    def test_summary_persisted_on_rfp(self, scripted):
        completion = scripted("Laptop refresh.\n- 50 units\n\n- 30 day delivery")

        async def scenario(factory):
            rfp_id, _ = await seed(factory)
            async with factory() as db:
                service = ProcurementService(ProcurementStore(db), ProcurementPipeline(completion))
                await service.summarize_rfp(rfp_id)
            async with factory() as db:
                return await ProcurementStore(db).get_rfp(rfp_id)

        rfp = run_scenario(scenario)
        assert rfp.summary == "Laptop refresh."
        assert json.loads(rfp.key_points) == ["- 50 units", "- 30 day delivery"]
        assert rfp.description == "Supply 50 laptops within 30 days"


@pytest.mark.usefixtures("database")
class TestVendorStore:

    def test_duplicate_email_conflict(self):
        async def scenario(factory):
            async with factory() as db:
                store = ProcurementStore(db)
                await store.create_vendor("Acme", "sales@acme.test")
                with pytest.raises(ConflictError):
                    await store.create_vendor("Acme Again", "sales@acme.test")
                return await store.list_vendors()

        vendors = run_scenario(scenario)
        assert [v.name for v in vendors] == ["Acme"]
