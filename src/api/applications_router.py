"""
API endpoints for grant applications: draft CRUD, progress saving,
final submission, and the Zoho Creator submission/upload routes.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from src.api.dependencies import get_config, get_controller, get_file_attacher, get_workflow
from src.grants.controller import ApplicationController
from src.grants.eligibility import evaluate_payload
from src.grants.intake import IntakeWorkflow
from src.grants.validation import validate_application, validate_concept_paper, validate_proposal
from src.integrations.contracts.interfaces import FormVariant
from src.integrations.zoho.errors import AuthError
from src.integrations.zoho.uploads import FileAttacher
from src.utils.config_loader import IntakeConfig

import logging

logger = logging.getLogger(__name__)

api = APIRouter()

_VARIANT_LABELS = {
    FormVariant.CONCEPT: "Concept paper",
    FormVariant.PROPOSAL: "GAP Proposal",
    FormVariant.COMMUNITY_PROPOSAL: "Community Proposal",
}


def _parse_sort(sort: str, direction: str) -> tuple[str, bool]:
    sort = (sort or "created_at").strip()
    direction = (direction or "desc").strip().lower()
    descending = direction != "asc"
    return sort, descending


def _not_found():
    return HTTPException(status_code=404, detail="Application not found")


# --------------------------------------------------------------------------- #
# Draft CRUD
# --------------------------------------------------------------------------- #
@api.get("/applications", tags=["Applications"])
async def list_applications(
    sort: str = "created_at",
    direction: str = "desc",
    controller: ApplicationController = Depends(get_controller),
):
    sort, descending = _parse_sort(sort, direction)
    return controller.list_applications(order_by=sort, descending=descending)


@api.get("/applications/status/{status}", tags=["Applications"])
async def list_applications_by_status(status: str, controller: ApplicationController = Depends(get_controller)):
    return controller.list_applications(status=status)


@api.get("/applications/{app_id}", tags=["Applications"])
async def get_application(app_id: str, controller: ApplicationController = Depends(get_controller)):
    app = controller.get_application(app_id)
    if not app:
        raise _not_found()
    return app


@api.post("/applications", tags=["Applications"], status_code=201)
async def create_application(payload: dict = Body(...), controller: ApplicationController = Depends(get_controller)):
    return controller.create_application(payload)


@api.put("/applications/{app_id}", tags=["Applications"])
async def update_application(
    app_id: str,
    payload: dict = Body(...),
    controller: ApplicationController = Depends(get_controller),
):
    app = controller.update_application(app_id, payload)
    if not app:
        raise _not_found()
    return app


@api.put("/applications/{app_id}/progress", tags=["Applications"])
async def save_progress(
    app_id: str,
    payload: dict = Body(...),
    controller: ApplicationController = Depends(get_controller),
):
    step_data = payload.get("stepData") or {}
    if not isinstance(step_data, dict):
        raise HTTPException(status_code=400, detail="stepData must be an object")
    app = controller.save_progress(
        app_id,
        current_step=payload.get("currentStep"),
        step_data=step_data,
        completed_steps=payload.get("completedSteps"),
    )
    if not app:
        raise _not_found()
    return app


@api.put("/applications/{app_id}/submit", tags=["Applications"])
async def submit_application(
    app_id: str,
    payload: dict = Body(...),
    controller: ApplicationController = Depends(get_controller),
    workflow: IntakeWorkflow = Depends(get_workflow),
):
    existing = controller.get_application(app_id)
    if not existing:
        raise _not_found()
    form_data = {**existing["formData"], **payload}
    validate_application(form_data)

    eligibility = evaluate_payload(form_data)
    if not eligibility.eligible:
        logger.info("Application %s is not eligible: %s", existing["applicationId"], eligibility.reason)
        controller.update_application(existing["id"], {**payload, "eligibilityStatus": "ineligible"})
        await workflow.notify_ineligible(form_data, eligibility)
        return JSONResponse(
            status_code=403,
            content={"success": False, "message": eligibility.reason, "eligibility": False},
        )

    app = controller.submit_application(app_id, {**payload, "eligibilityStatus": "eligible"})
    forwarding = await workflow.forward(app["formData"], FormVariant.PROPOSAL)
    if forwarding.success:
        app = controller.record_forwarding(app["id"], forwarding.record_id)
    return {**app, **forwarding.to_dict()}


@api.delete("/applications/{app_id}", tags=["Applications"])
async def delete_application(app_id: str, controller: ApplicationController = Depends(get_controller)):
    if not controller.delete_application(app_id):
        raise _not_found()
    return {"message": "Application deleted successfully"}


# --------------------------------------------------------------------------- #
# Zoho Creator submissions
# --------------------------------------------------------------------------- #
async def _submit_to_zoho(payload: Dict[str, Any], variant: FormVariant, workflow: IntakeWorkflow):
    label = _VARIANT_LABELS[variant]
    logger.info("Received %s submission for %r", label, payload.get("organizationName"))
    outcome = await workflow.submit_form(payload, variant)
    if not outcome.eligible:
        return JSONResponse(
            status_code=403,
            content={"success": False, "message": outcome.reason, "eligibility": False},
        )

    body: Dict[str, Any] = {
        "success": True,
        "message": f"{label} submitted successfully!",
        "eligibility": True,
        "applicationId": (outcome.application or {}).get("applicationId"),
        "recordId": outcome.forwarding.record_id,
    }
    body.update(outcome.forwarding.to_dict())
    return body


@api.post("/applications/zoho/concept", tags=["Zoho"])
async def submit_concept_paper(payload: dict = Body(...), workflow: IntakeWorkflow = Depends(get_workflow)):
    return await _submit_to_zoho(validate_concept_paper(payload), FormVariant.CONCEPT, workflow)


@api.post("/applications/zoho/proposal", tags=["Zoho"])
async def submit_proposal(payload: dict = Body(...), workflow: IntakeWorkflow = Depends(get_workflow)):
    return await _submit_to_zoho(validate_proposal(payload), FormVariant.PROPOSAL, workflow)


@api.post("/applications/zoho/community-proposal", tags=["Zoho"])
async def submit_community_proposal(payload: dict = Body(...), workflow: IntakeWorkflow = Depends(get_workflow)):
    # community proposals skip validation and the eligibility gate
    forwarding = await workflow.forward(payload, FormVariant.COMMUNITY_PROPOSAL)
    if not forwarding.success:
        return JSONResponse(
            status_code=502,
            content={
                "success": False,
                "message": forwarding.result.message or "Failed to submit Community Proposal to Zoho Creator",
                **forwarding.to_dict(),
            },
        )
    return {
        "success": True,
        "message": "Community Proposal submitted and Zoho record created successfully!",
        "recordId": forwarding.record_id,
    }


@api.post("/applications/zoho/upload/{record_id}/{field_name}", tags=["Zoho"])
async def upload_file(
    record_id: str,
    field_name: str,
    file: Optional[UploadFile] = File(None),
    attacher: FileAttacher = Depends(get_file_attacher),
    config: IntakeConfig = Depends(get_config),
):
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded.")

    limits = config.uploads
    if file.content_type not in limits.allowed_content_types:
        raise HTTPException(status_code=400, detail="Only PDF files are allowed")
    content = await file.read()
    if len(content) > limits.max_bytes:
        raise HTTPException(status_code=413, detail=f"File exceeds the {limits.max_bytes // (1024 * 1024)}MB limit")

    logger.info(f"Uploading file {file.filename} to record {record_id}, field {field_name}")
    try:
        result = await attacher.attach(record_id, field_name, content, file.filename or "upload.pdf", file.content_type)
    except AuthError as e:
        logger.error(f"Zoho Creator authentication failed during upload: {e}")
        return JSONResponse(status_code=502, content={"success": False, "message": "Could not authenticate with Zoho Creator"})

    if not result.success:
        return JSONResponse(status_code=502, content=result.to_dict())
    return {"success": True, "message": result.message}
