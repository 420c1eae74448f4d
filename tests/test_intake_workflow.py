"""Tests for the submission workflow: gate, persist, forward, notify."""

from datetime import date
from unittest.mock import AsyncMock

import httpx
import pytest

from src.grants.controller import ApplicationController
from src.grants.eligibility import REASON_ORGANIZATION_TYPE
from src.grants.intake import IntakeWorkflow
from src.integrations.contracts.interfaces import FormVariant, SubmissionResult, UploadedFile
from src.integrations.zoho.errors import AuthError, ValidationError
from src.integrations.zoho.records import RecordSubmitter
from src.integrations.zoho.uploads import FileAttacher

TODAY = date(2024, 6, 15)


def _payload(**overrides):
    payload = {
        "projectTitle": "Reef Restoration",
        "organizationName": "Coastal Friends",
        "organizationType": "NGO",
        "dateOfIncorporation": "2015-03-09",
        "contactName": "Ana Cho",
        "contactEmail": "ana@example.org",
        "salaryBudget": "1000",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def notifier():
    n = AsyncMock()
    n.send_success_email.return_value = {"success": True}
    n.send_ineligibility_email.return_value = {"success": True}
    return n


@pytest.fixture
def controller(db):
    return ApplicationController(db)


@pytest.fixture
def workflow(zoho_config, token_cache, http_client, notifier, controller):
    submitter = RecordSubmitter(zoho_config, token_cache, client=http_client)
    attacher = FileAttacher(zoho_config, token_cache, client=http_client)
    return IntakeWorkflow(submitter, attacher=attacher, notifier=notifier, controller=controller)


@pytest.mark.asyncio
async def test_ineligible_submission_is_never_forwarded(workflow, zoho_stub, notifier, controller):
    outcome = await workflow.submit_form(_payload(organizationType="Government Body"), FormVariant.CONCEPT, today=TODAY)
    assert outcome.eligible is False
    assert outcome.reason == REASON_ORGANIZATION_TYPE
    assert zoho_stub.requests == []
    assert controller.list_applications() == []
    notifier.send_ineligibility_email.assert_awaited_once_with("ana@example.org", REASON_ORGANIZATION_TYPE, "Ana Cho")
    notifier.send_success_email.assert_not_awaited()


@pytest.mark.asyncio
async def test_eligible_submission_is_persisted_forwarded_and_acknowledged(workflow, zoho_stub, notifier):
    outcome = await workflow.submit_form(_payload(), FormVariant.CONCEPT, today=TODAY)
    assert outcome.eligible is True
    assert outcome.forwarding.success is True
    assert outcome.forwarding.record_id == "123"
    assert outcome.application["applicationStatus"] == "submitted"
    assert outcome.application["submittedAt"] is not None
    assert outcome.application["eligibilityStatus"] == "eligible"
    assert outcome.application["zohoRecordId"] == "123"
    assert outcome.application["variant"] == "concept"
    notifier.send_success_email.assert_awaited_once_with("ana@example.org", "Ana Cho")
    assert len(zoho_stub.requests_to("/form/GAP_Concept_Paper")) == 1


@pytest.mark.asyncio
async def test_forwarding_rejection_still_acknowledges_applicant(workflow, zoho_stub, notifier):
    zoho_stub.create_response = (400, {"code": 3002, "error": {"Email": "Enter a valid email"}})
    outcome = await workflow.submit_form(_payload(), FormVariant.CONCEPT, today=TODAY)
    assert outcome.eligible is True
    assert outcome.forwarding.success is False
    assert isinstance(outcome.forwarding.result.error, ValidationError)
    assert outcome.application["zohoRecordId"] is None
    notifier.send_success_email.assert_awaited_once()
    body = outcome.forwarding.to_dict()
    assert body["zohoSuccess"] is False
    assert body["zohoRecordId"] is None
    assert body["zohoError"] == {"code": 3002, "error": {"Email": "Enter a valid email"}}


@pytest.mark.asyncio
async def test_auth_failure_is_captured_not_raised(workflow, zoho_stub, notifier):
    zoho_stub.token_response = (401, {"error": "invalid_client"})
    outcome = await workflow.submit_form(_payload(), FormVariant.PROPOSAL, today=TODAY)
    assert outcome.forwarding.success is False
    assert isinstance(outcome.forwarding.result.error, AuthError)
    assert zoho_stub.requests_to("/form/") == []
    notifier.send_success_email.assert_awaited_once()


@pytest.mark.asyncio
async def test_transport_failure_is_captured(notifier, controller):
    submitter = AsyncMock()
    submitter.submit.side_effect = httpx.ConnectTimeout("timed out")
    workflow = IntakeWorkflow(submitter, notifier=notifier, controller=controller)
    outcome = await workflow.submit_form(_payload(), FormVariant.CONCEPT, today=TODAY)
    assert outcome.forwarding.success is False
    assert outcome.forwarding.result.message == "Could not reach Zoho Creator"
    notifier.send_success_email.assert_awaited_once()


@pytest.mark.asyncio
async def test_email_failure_does_not_break_submission(workflow, notifier):
    notifier.send_success_email.side_effect = OSError("smtp down")
    outcome = await workflow.submit_form(_payload(), FormVariant.CONCEPT, today=TODAY)
    assert outcome.eligible is True
    assert outcome.forwarding.success is True


@pytest.mark.asyncio
async def test_files_are_attached_after_record_creation(workflow, zoho_stub):
    zoho_stub.upload_queue = [(200, {"code": 3000}), (200, {"code": 2945, "message": "bad"})]
    files = [
        UploadedFile(field_name="Concept_PDF", file_name="a.pdf", content=b"a"),
        UploadedFile(field_name="Budget_PDF", file_name="b.pdf", content=b"b"),
    ]
    outcome = await workflow.submit_form(_payload(), FormVariant.CONCEPT, files=files, today=TODAY)
    assert [u.success for u in outcome.forwarding.uploads] == [True, False]
    paths = [r.url.path for r in zoho_stub.requests_to("/upload")]
    assert paths[0].endswith("/123/Concept_PDF/upload")
    assert paths[1].endswith("/123/Budget_PDF/upload")


@pytest.mark.asyncio
async def test_no_uploads_when_record_creation_fails(workflow, zoho_stub):
    zoho_stub.create_response = (200, {"code": 3001, "error": "bad"})
    files = [UploadedFile(field_name="Concept_PDF", file_name="a.pdf", content=b"a")]
    outcome = await workflow.submit_form(_payload(), FormVariant.CONCEPT, files=files, today=TODAY)
    assert outcome.forwarding.uploads == []
    assert zoho_stub.requests_to("/upload") == []


@pytest.mark.asyncio
async def test_forward_maps_before_submitting():
    submitter = AsyncMock()
    submitter.submit.return_value = SubmissionResult(success=True, message="ok", record_id="9")
    workflow = IntakeWorkflow(submitter)
    result = await workflow.forward({"projectTitle": "X", "objective1": "A"}, FormVariant.PROPOSAL)
    assert result.record_id == "9"
    record, variant = submitter.submit.await_args.args
    assert record["Project_title1"] == "X"
    assert record["Project_Objective_s"] == "A"
    assert variant is FormVariant.PROPOSAL
