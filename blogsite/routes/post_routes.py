from flask import Blueprint, jsonify, redirect, request, url_for

from blogsite.routes.forms import read_file, read_form
from blogsite.routes.guards import Guard, guarded
from blogsite.services import post_service


post_bp = Blueprint("posts", __name__)


@post_bp.route("/", methods=["GET"])
@guarded(Guard.SOFT)
def index(identity):
    page = request.args.get("page", default=1, type=int)
    limit = request.args.get("limit", default=None, type=int)

    data = post_service.get_posts(page, limit)
    return jsonify({
        "title": "Home",
        "logged_in": identity.is_authenticated,
        "user_id": identity.user_id,
        **data,
    }), 200


@post_bp.route("/create", methods=["GET"])
@guarded(Guard.HARD)
def create_form(identity):
    return jsonify({"title": "Create Blog", "fields": ["title", "content", "image"]}), 200


@post_bp.route("/create", methods=["POST"])
@guarded(Guard.HARD)
def create_post(identity):
    data = read_form()
    post_service.create_post(
        identity.user_id,
        data.get("title"),
        data.get("content"),
        read_file("image"),
    )
    return redirect(url_for("posts.index"))


@post_bp.route("/edit/<post_id>", methods=["GET"])
@guarded(Guard.HARD_OWNERSHIP)
def edit_form(identity, post):
    return jsonify({"title": "Edit Blog", "blog": post_service.serialize_post(post)}), 200


@post_bp.route("/edit/<post_id>", methods=["POST"])
@guarded(Guard.HARD_OWNERSHIP)
def edit_post(identity, post):
    data = read_form()
    post_service.edit_post(
        post,
        data.get("title"),
        data.get("content"),
        read_file("image"),
    )
    return redirect(url_for("posts.index"))
