"""
Read-only Zoho Creator report endpoints.
"""
import logging

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.api.dependencies import get_config, get_report_reader
from src.integrations.zoho.errors import ZohoIntegrationError
from src.integrations.zoho.reports import ReportReader
from src.integrations.zoho.base import response_json
from src.utils.config_loader import IntakeConfig

logger = logging.getLogger(__name__)

api = APIRouter()


@api.get("/zoho-reports/test", tags=["Zoho Reports"])
async def reports_router_check():
    return {"success": True, "message": "Zoho Report Router is working!"}


@api.get("/zoho-reports/gap-concept-papers", tags=["Zoho Reports"])
async def list_gap_concept_papers(
    reader: ReportReader = Depends(get_report_reader),
    config: IntakeConfig = Depends(get_config),
):
    if not config.zoho.org_id or not config.zoho.app_id:
        logger.error("Missing Zoho Creator org/app configuration")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": "Missing environment variables",
                "error": {"orgId": bool(config.zoho.org_id), "appId": bool(config.zoho.app_id)},
            },
        )

    try:
        data = await reader.fetch_records(config.zoho.concept_report, fields=config.report_fields)
    except httpx.HTTPStatusError as e:
        logger.error("Zoho report request failed with HTTP %s", e.response.status_code)
        return JSONResponse(
            status_code=502,
            content={"success": False, "message": str(e), "error": response_json(e.response)},
        )
    except (ZohoIntegrationError, httpx.HTTPError) as e:
        logger.error(f"Error in Zoho Report API: {e}")
        return JSONResponse(
            status_code=502,
            content={"success": False, "message": str(e), "error": getattr(e, "payload", None)},
        )
    return {"success": True, "data": data}
