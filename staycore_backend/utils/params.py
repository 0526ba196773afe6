# staycore_backend/utils/params.py
from flask import request

from ..derive.money import InvalidAmount, parse_amount
from ..derive.periods import parse_date
from ..errors import ValidationError


def json_body():
    return request.get_json(silent=True) or {}


def require_fields(data, fields):
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError("missing_field", f"{field} is required", field=field)


def pagination(default_limit=50, max_limit=200):
    try:
        limit = max(1, min(int(request.args.get("limit", default_limit)), max_limit))
        offset = max(0, int(request.args.get("offset", 0)))
    except ValueError:
        raise ValidationError("invalid_pagination", "limit and offset must be integers") from None
    return limit, offset


def date_value(data, field, required=False):
    value = data.get(field)
    if value in (None, ""):
        if required:
            raise ValidationError("missing_field", f"{field} is required", field=field)
        return None
    try:
        return parse_date(value)
    except ValueError:
        raise ValidationError("invalid_date", f"{field} must be in YYYY-MM-DD format", field=field) from None


def date_arg(name):
    return date_value(request.args, name)


def amount_value(data, field, required=True):
    value = data.get(field)
    if value in (None, "") and not required:
        return None
    try:
        return parse_amount(value)
    except InvalidAmount:
        raise ValidationError("invalid_amount", f"{field} must be a non-negative number", field=field) from None


def int_value(data, field, required=False):
    value = data.get(field)
    if value in (None, ""):
        if required:
            raise ValidationError("missing_field", f"{field} is required", field=field)
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError("invalid_integer", f"{field} must be an integer", field=field) from None
