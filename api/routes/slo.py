from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter

from api.requests import SloReportRequest
from api.routes.common import get_objectives, get_settings, get_source
from api.routes.exception import handle_exceptions
from config import parse_objectives
from engine.slo import Objective, build_report

router = APIRouter(tags=["SLO"])


@router.post("/slo/report", summary="Error budget report for declared SLOs")
@handle_exceptions
async def slo_report(req: SloReportRequest) -> Dict[str, Any]:
    settings = get_settings()
    if req.objectives:
        configs = parse_objectives([c.model_dump() for c in req.objectives])
        objectives = [Objective.from_config(c) for c in configs]
    else:
        objectives = get_objectives()

    report = await build_report(
        objectives,
        get_source(),
        deadline=req.deadline_seconds or settings.report_deadline,
        max_parallel=settings.max_parallel_measurements,
    )
    return report.to_dict()
