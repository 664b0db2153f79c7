from flask import current_app, jsonify, redirect, render_template, request

from stocklist.services.inventory_service import InventoryRequest, InventoryService, Redirect
from stocklist.services.session_store import FlaskSessionStore

from . import inventory_bp


def _inventory_request() -> InventoryRequest:
    """Snapshot the current Flask request; business logic never reads it directly."""
    return InventoryRequest(
        method=request.method,
        path=request.script_root + request.path,
        form={key: request.form.get(key, "") for key in request.form},
    )


def _inventory_service() -> InventoryService:
    return InventoryService(
        store=FlaskSessionStore(),
        categories=current_app.config["PRODUCT_CATEGORIES"],
    )


@inventory_bp.route('/', methods=['GET', 'POST'])
def index():
    outcome = _inventory_service().handle(_inventory_request())
    if isinstance(outcome, Redirect):
        return redirect(outcome.location, code=303)
    return render_template('inventory/index.html', page=outcome)


@inventory_bp.get('/healthz')
def healthz():
    return jsonify({"status": "ok"})
