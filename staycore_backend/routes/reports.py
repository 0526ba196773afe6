from flask import Blueprint, jsonify, request

from ..security import admin_required
from ..services import dashboard_summary, financial_report, maintenance_report, occupancy_report
from ..utils.params import date_arg

reports_bp = Blueprint("reports", __name__, url_prefix="/api")


@reports_bp.get("/reports/financial")
@admin_required
def financial(auth):
    period = request.args.get("period", "current-month")
    building_id = request.args.get("building_id", type=int)
    return jsonify(financial_report(auth, period, now=date_arg("as_of"), building_id=building_id)), 200


@reports_bp.get("/reports/occupancy")
@admin_required
def occupancy(auth):
    return jsonify(occupancy_report(auth, request.args.get("building_id", type=int))), 200


@reports_bp.get("/reports/maintenance")
@admin_required
def maintenance(auth):
    return jsonify(maintenance_report(auth, request.args.get("room_id", type=int))), 200


@reports_bp.get("/reports/summary")
@admin_required
def summary(auth):
    building_id = request.args.get("building_id", type=int)
    return jsonify(dashboard_summary(auth, today=date_arg("as_of"), building_id=building_id)), 200
