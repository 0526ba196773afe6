# staycore_backend/routes/auth.py
from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import create_access_token, jwt_required
from werkzeug.security import check_password_hash

from ..security import ADMIN_ROLE, current_auth
from ..utils.params import json_body

auth_bp = Blueprint("auth", __name__, url_prefix="/api")


def _check_admin_password(password):
    password_hash = current_app.config.get("ADMIN_PASSWORD_HASH")
    if not password_hash:
        current_app.logger.warning("Admin login attempted but no admin password is configured")
        return False
    return check_password_hash(password_hash, password)


@auth_bp.post("/auth/admin-login")
def admin_login():
    data = json_body()
    username = (data.get("username") or "").strip()
    password = data.get("password") or ""

    if username != current_app.config["ADMIN_USERNAME"] or not _check_admin_password(password):
        return jsonify({"error": "unauthorized", "message": "Bad credentials"}), 401

    # identity MUST be a string (PyJWT wants 'sub' as str)
    access_token = create_access_token(identity=username, additional_claims={"role": ADMIN_ROLE})
    return jsonify(access_token=access_token, user={"username": username, "role": ADMIN_ROLE}), 200


@auth_bp.get("/auth/me")
@jwt_required()
def me():
    auth = current_auth()
    return jsonify(identity=auth.identity, role=auth.role, is_admin=auth.is_admin), 200
