from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.web import current_role, domain_error_response, error_response, roles_required, to_json
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)

REVIEWERS = (Role.PROGRAMME_COORDINATOR, Role.ACADEMIC_MANAGER)


def register(app: Flask, container: Container) -> None:
    service = container.claim_service

    @app.route("/claims", methods=["POST"], endpoint="submit_claim")
    @roles_required(Role.LECTURER)
    def submit_claim():
        data = request.get_json(silent=True) or request.form
        try:
            result = service.submit_claim(
                current_role=current_role(),
                lecturer_id=session.get("lecturer_id"),
                hours_worked=data.get("hours_worked"),
                hourly_rate=data.get("hourly_rate"),
                notes=data.get("notes"),
            )
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Claim submission failed")
            return error_response("System error while submitting claim", 500)

        if not result.accepted:
            return jsonify({"success": False, "errors": result.violations}), 422
        return jsonify({"success": True, "claim": to_json(result.claim)}), 201

    @app.route("/claims/mine", endpoint="my_claims")
    @roles_required(Role.LECTURER)
    def my_claims():
        claims = service.list_my_claims(lecturer_id=session.get("lecturer_id") or "")
        return jsonify({"success": True, "claims": to_json(claims)})

    @app.route("/claims/pending", endpoint="pending_claims")
    @roles_required(*REVIEWERS)
    def pending_claims():
        return jsonify({"success": True, "claims": to_json(service.list_pending())})

    def _decide(action, claim_id: int):
        try:
            claim = action(current_role=current_role(), reviewer_name=session.get("name") or "", claim_id=claim_id)
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Claim review failed for %s", claim_id)
            return error_response("System error while processing claim", 500)
        return jsonify({"success": True, "claim": to_json(claim)})

    @app.route("/claims/<int:claim_id>/approve", methods=["POST"], endpoint="approve_claim")
    @roles_required(*REVIEWERS)
    def approve_claim(claim_id: int):
        return _decide(service.approve_claim, claim_id)

    @app.route("/claims/<int:claim_id>/reject", methods=["POST"], endpoint="reject_claim")
    @roles_required(*REVIEWERS)
    def reject_claim(claim_id: int):
        return _decide(service.reject_claim, claim_id)

    @app.route("/claims/<int:claim_id>/pay", methods=["POST"], endpoint="pay_claim")
    @roles_required(Role.HR)
    def pay_claim(claim_id: int):
        try:
            claim = service.mark_paid(current_role=current_role(), actor_name=session.get("name") or "", claim_id=claim_id)
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Marking claim %s paid failed", claim_id)
            return error_response("System error while processing payment", 500)
        return jsonify({"success": True, "claim": to_json(claim)})

    @app.route("/dashboard/lecturer", endpoint="lecturer_dashboard")
    @roles_required(Role.LECTURER)
    def lecturer_dashboard():
        data = service.lecturer_dashboard(lecturer_id=session.get("lecturer_id") or "")
        return jsonify({"success": True, "dashboard": to_json(data)})

    @app.route("/dashboard/coordinator", endpoint="coordinator_dashboard")
    @roles_required(*REVIEWERS)
    def coordinator_dashboard():
        try:
            data = service.coordinator_dashboard()
        except Exception:
            logger.exception("Coordinator dashboard failed")
            return error_response("Unable to load coordinator dashboard", 500)
        return jsonify({"success": True, "dashboard": to_json(data)})

    @app.route("/dashboard/manager", endpoint="manager_dashboard")
    @roles_required(Role.ACADEMIC_MANAGER, Role.HR)
    def manager_dashboard():
        try:
            data = service.manager_dashboard()
        except Exception:
            logger.exception("Manager dashboard failed")
            return error_response("Unable to load manager dashboard", 500)
        return jsonify({"success": True, "dashboard": to_json(data)})
