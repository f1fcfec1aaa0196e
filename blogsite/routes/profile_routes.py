from flask import Blueprint, jsonify, redirect, url_for

from blogsite.routes.forms import read_form
from blogsite.routes.guards import Guard, guarded
from blogsite.services import profile_service


profile_bp = Blueprint("profiles", __name__)


@profile_bp.route("/profile", methods=["GET"])
@guarded(Guard.HARD)
def view_profile(identity):
    return jsonify({
        "title": "Profile",
        "user": profile_service.get_profile(identity.user_id),
    }), 200


@profile_bp.route("/profile", methods=["POST"])
@guarded(Guard.HARD)
def update_profile(identity):
    data = read_form()
    profile_service.update_profile(
        identity.user_id,
        full_name=data.get("full_name"),
        email=data.get("email"),
        username=data.get("username"),
    )
    return redirect(url_for("profiles.view_profile"))
