from __future__ import annotations

import json
import logging
from datetime import date

from flask import Flask, Response, jsonify, request, session

from ..common.clock import Clock
from ..common.datetime_utils import parse_month
from ..common.web import domain_error_response, error_response, roles_required, to_json
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import DomainError, ValidationError

logger = logging.getLogger(__name__)


def _month_arg(value: str | None, clock: Clock) -> date:
    if not value:
        return clock.now().date()
    try:
        return parse_month(value)
    except ValueError:
        raise ValidationError("Month must be in YYYY-MM format")


def register(app: Flask, container: Container) -> None:
    reporting = container.reporting_service

    @app.route("/reports/monthly", methods=["POST"], endpoint="generate_monthly_report")
    @roles_required(Role.HR)
    def generate_monthly_report():
        data = request.get_json(silent=True) or request.form
        try:
            report = reporting.generate_monthly_report(
                _month_arg(data.get("month"), container.clock),
                generated_by=session.get("name") or "HR",
            )
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Monthly report generation failed")
            return error_response("System error while generating report", 500)

        body = to_json(report)
        body["report_data"] = json.loads(report.report_data)
        return jsonify({"success": True, "report": body}), 201

    @app.route("/reports/monthly/summary", endpoint="monthly_summary")
    @roles_required(Role.HR, Role.ACADEMIC_MANAGER, Role.PROGRAMME_COORDINATOR)
    def monthly_summary():
        try:
            summary = reporting.summarize_month(_month_arg(request.args.get("month"), container.clock))
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Monthly summary failed")
            return error_response("System error while summarizing claims", 500)
        return jsonify({"success": True, "summary": to_json(summary.to_payload())})

    @app.route("/reports", endpoint="list_reports")
    @roles_required(Role.HR)
    def list_reports():
        return jsonify({"success": True, "reports": to_json(reporting.list_reports())})

    @app.route("/claims/<int:claim_id>/invoice", endpoint="claim_invoice")
    @roles_required(Role.HR)
    def claim_invoice(claim_id: int):
        try:
            payload = container.invoice_generator.generate_invoice(claim_id)
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Invoice generation failed for claim %s", claim_id)
            return error_response("System error while generating invoice", 500)
        return Response(payload, mimetype="application/json")
