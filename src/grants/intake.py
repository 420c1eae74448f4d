"""
Submission workflow for concept papers and proposals.

Order of operations: eligibility gate, local persistence, field mapping and
record creation in Zoho Creator, optional file attachment, applicant email.
Ineligible submissions are only notified. For eligible ones, forwarding
failures are captured in the outcome and logged, and the applicant still
receives the success acknowledgment.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import httpx

from src.grants.eligibility import evaluate_payload
from src.integrations.contracts.interfaces import (
    EligibilityOutcome,
    FormVariant,
    SubmissionResult,
    UploadedFile,
)
from src.integrations.zoho.errors import AuthError, ZohoIntegrationError
from src.integrations.zoho.field_mapper import map_submission

logger = logging.getLogger(__name__)


@dataclass
class ForwardingOutcome:
    result: SubmissionResult
    uploads: List[SubmissionResult] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.result.success

    @property
    def record_id(self) -> Optional[str]:
        return self.result.record_id

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "zohoSuccess": self.success,
            "zohoRecordId": self.record_id,
            "zohoError": None if self.success else self.result.to_dict().get("error", self.result.message),
        }
        if self.uploads:
            out["uploads"] = [u.to_dict() for u in self.uploads]
        return out


@dataclass
class IntakeOutcome:
    eligible: bool
    reason: str
    application: Optional[Dict[str, Any]] = None
    forwarding: Optional[ForwardingOutcome] = None


def recipient_of(payload: Mapping[str, Any]) -> str:
    return str(payload.get("contactEmail") or payload.get("email") or "").strip()


def applicant_name_of(payload: Mapping[str, Any]) -> str:
    name = payload.get("contactName")
    if not name:
        name = " ".join(str(p) for p in (payload.get("firstName"), payload.get("lastName")) if p)
    return str(name or "")


class IntakeWorkflow:
    def __init__(self, submitter, attacher=None, notifier=None, controller=None):
        self.submitter = submitter
        self.attacher = attacher
        self.notifier = notifier
        self.controller = controller

    async def submit_form(
        self,
        payload: Mapping[str, Any],
        variant: Union[FormVariant, str],
        files: Sequence[UploadedFile] = (),
        today: Optional[date] = None,
    ) -> IntakeOutcome:
        variant = FormVariant(variant)
        eligibility = evaluate_payload(payload, today=today)
        if not eligibility.eligible:
            logger.info("Submission for %r is not eligible: %s", payload.get("organizationName"), eligibility.reason)
            await self.notify_ineligible(payload, eligibility)
            return IntakeOutcome(eligible=False, reason=eligibility.reason)

        application = None
        if self.controller is not None:
            created = self.controller.create_application({
                **payload,
                "variant": variant.value,
                "eligibilityStatus": "eligible",
            })
            application = self.controller.submit_application(created["id"])

        forwarding = await self.forward(payload, variant, files)
        if application is not None and forwarding.record_id:
            application = self.controller.record_forwarding(application["id"], forwarding.record_id)

        await self._notify_success(payload)
        return IntakeOutcome(eligible=True, reason=eligibility.reason, application=application, forwarding=forwarding)

    async def forward(
        self,
        payload: Mapping[str, Any],
        variant: Union[FormVariant, str],
        files: Sequence[UploadedFile] = (),
    ) -> ForwardingOutcome:
        """Map and create the Zoho record, then attach files. Never raises for Zoho failures."""
        variant = FormVariant(variant)
        record = map_submission(payload, variant)
        try:
            result = await self.submitter.submit(record, variant)
        except AuthError as e:
            logger.error(f"Zoho Creator authentication failed for {variant.value} submission: {e}")
            result = SubmissionResult(success=False, message="Could not authenticate with Zoho Creator", error=e)
        except ZohoIntegrationError as e:
            logger.error(f"Zoho Creator {variant.value} submission failed: {e}")
            result = SubmissionResult(success=False, message=str(e), error=e)
        except httpx.HTTPError as e:
            logger.error(f"Could not reach Zoho Creator for {variant.value} submission: {e}")
            result = SubmissionResult(success=False, message="Could not reach Zoho Creator", error=str(e))

        if not result.success:
            logger.error("Forwarding %s submission failed: %s", variant.value, result.to_dict())
            return ForwardingOutcome(result=result)

        logger.info("Zoho Creator %s record created: %s", variant.value, result.record_id)
        uploads: List[SubmissionResult] = []
        if files and self.attacher is not None:
            for f in files:
                uploads.append(await self._attach(result.record_id, f))
        return ForwardingOutcome(result=result, uploads=uploads)

    async def _attach(self, record_id: str, f: UploadedFile) -> SubmissionResult:
        try:
            return await self.attacher.attach(record_id, f.field_name, f.content, f.file_name, f.content_type)
        except AuthError as e:
            logger.error(f"Zoho Creator authentication failed while uploading {f.file_name}: {e}")
            return SubmissionResult(success=False, message=f"Failed to upload {f.file_name}", error=e)

    async def notify_ineligible(self, payload: Mapping[str, Any], eligibility: EligibilityOutcome) -> None:
        if self.notifier is None:
            return
        try:
            await self.notifier.send_ineligibility_email(recipient_of(payload), eligibility.reason, applicant_name_of(payload))
        except Exception as e:
            logger.error(f"Failed to send ineligibility email: {e}")

    async def _notify_success(self, payload: Mapping[str, Any]) -> None:
        if self.notifier is None:
            return
        try:
            await self.notifier.send_success_email(recipient_of(payload), applicant_name_of(payload))
        except Exception as e:
            logger.error(f"Failed to send success email: {e}")
