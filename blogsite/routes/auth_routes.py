from flask import Blueprint, current_app, jsonify, redirect, url_for

from blogsite.routes.forms import read_file, read_form
from blogsite.routes.guards import Guard, guarded
from blogsite.services import auth_service


auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["GET"])
@guarded(Guard.SOFT)
def register_form(identity):
    if identity.is_authenticated:
        return redirect(url_for("profiles.view_profile"))
    return jsonify({
        "title": "Sign Up",
        "fields": ["full_name", "email", "username", "password", "profile_image"],
    }), 200


@auth_bp.route("/register", methods=["POST"])
@guarded(Guard.NONE)
def register():
    data = read_form()
    auth_service.register(
        data.get("full_name"),
        data.get("email"),
        data.get("username"),
        data.get("password"),
        read_file("profile_image"),
    )
    return redirect(url_for("auth.login_form"))


@auth_bp.route("/login", methods=["GET"])
@guarded(Guard.SOFT)
def login_form(identity):
    if identity.is_authenticated:
        return redirect(url_for("profiles.view_profile"))
    return jsonify({"title": "Login", "fields": ["username", "password"]}), 200


@auth_bp.route("/login", methods=["POST"])
@guarded(Guard.NONE)
def login():
    data = read_form()
    token = auth_service.login(data.get("username"), data.get("password"))

    response = redirect(url_for("posts.index"))
    response.set_cookie(current_app.config["TOKEN_COOKIE_NAME"], token, httponly=True)
    return response


@auth_bp.route("/logout", methods=["GET"])
@guarded(Guard.NONE)
def logout():
    response = redirect(url_for("posts.index"))
    response.delete_cookie(current_app.config["TOKEN_COOKIE_NAME"], httponly=True)
    return response
