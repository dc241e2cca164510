from __future__ import annotations

from datetime import timedelta

from flask import Flask, redirect, session

from ..common.web import current_roles, current_user_id, json_response, login_required, payload, roles_required
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.enums import Role
from ..container import Container
from .service import LOGIN_PATH, landing_path


def register(app: Flask, container: Container) -> None:
    @app.route("/", methods=["GET"], endpoint="home")
    def home():
        if "user_id" not in session:
            return redirect(LOGIN_PATH)
        return redirect(landing_path(current_roles()))

    @app.route("/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = payload()
        s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["roles"] = [r.value for r in s_user.roles]

        return json_response({"user": s_user, "redirect": landing_path(s_user.roles)})

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return json_response({"redirect": LOGIN_PATH})

    @app.route("/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return json_response(
            {
                "user_id": current_user_id(),
                "name": session.get("name"),
                "roles": current_roles(),
                "home": landing_path(current_roles()),
            }
        )

    @app.route("/me", methods=["PUT"], endpoint="update_me")
    @login_required
    def update_me():
        data = payload()
        user = container.user_service.update_profile(
            current_user_id=current_user_id(),
            name=data.get("name", ""),
            phone_number=data.get("phone_number", ""),
        )
        session["name"] = user.display_name
        return json_response({"user": user})

    @app.route("/office/users", methods=["GET"], endpoint="office_users")
    @roles_required(Role.OFFICE)
    def office_users():
        return json_response({"users": container.user_service.list_users()})

    @app.route("/office/users", methods=["POST"], endpoint="office_create_user")
    @roles_required(Role.OFFICE)
    def office_create_user():
        data = payload()
        user_id = container.user_service.create_user(
            current_roles=current_roles(),
            email=data.get("email", ""),
            name=data.get("name", ""),
            password=data.get("password", ""),
            roles=data.get("roles") or [Role.EMPLOYEE.value],
            phone_number=data.get("phone_number", ""),
        )
        return json_response({"user_id": user_id}, 201)

    @app.route("/office/users/<int:user_id>/roles", methods=["PUT"], endpoint="office_update_roles")
    @roles_required(Role.OFFICE)
    def office_update_roles(user_id: int):
        container.user_service.update_roles(
            current_roles=current_roles(),
            user_id=user_id,
            roles=payload().get("roles") or [],
        )
        return json_response({"ok": True})

    @app.route("/office/users/<int:user_id>", methods=["DELETE"], endpoint="office_delete_user")
    @roles_required(Role.OFFICE)
    def office_delete_user(user_id: int):
        container.user_service.delete_user(
            current_roles=current_roles(),
            current_user_id=current_user_id(),
            user_id=user_id,
        )
        return json_response({"ok": True})
