from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.web import domain_error_response, error_response, login_required
from ..container import Container
from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or request.form
        try:
            s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))
        except AuthenticationError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Login failed")
            return error_response("System error during login", 500)

        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=7)

        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value
        session["lecturer_id"] = s_user.lecturer_id
        logger.info("User %s logged in as %s", s_user.user_id, s_user.role.value)
        return jsonify({"success": True, "user": {"name": s_user.full_name, "role": s_user.role.value}})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/me", endpoint="me")
    @login_required
    def me():
        return jsonify(
            {
                "success": True,
                "user": {
                    "user_id": session.get("user_id"),
                    "name": session.get("name"),
                    "role": session.get("role"),
                    "lecturer_id": session.get("lecturer_id"),
                },
            }
        )
