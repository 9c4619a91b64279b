"""GET /api/reports, financial and occupancy reports."""

from datetime import date

from fastapi import APIRouter, Query, Request

from api.base import success_response


VALID_REPORTS = {"daily", "weekly", "monthly", "overall", "occupancy"}


def create_reports_router(services: dict) -> APIRouter:
    router = APIRouter()

    report_svc = services["report"]

    @router.get("/reports")
    async def get_report(
        request: Request,
        type: str | None = Query(None),
        day: date | None = Query(None, alias="date"),
    ):
        if type not in VALID_REPORTS:
            raise ValueError(
                f"Unknown report '{type}'. Valid reports: {', '.join(sorted(VALID_REPORTS))}"
            )

        if type == "daily":
            data = report_svc.daily(day).model_dump(mode="json")
        elif type == "weekly":
            data = [d.model_dump(mode="json") for d in report_svc.weekly(day)]
        elif type == "monthly":
            data = report_svc.monthly(day).model_dump(mode="json")
        elif type == "overall":
            data = report_svc.overall().model_dump(mode="json")
        else:
            data = report_svc.occupancy().model_dump(mode="json")

        return success_response(data).model_dump(mode="json")

    return router
