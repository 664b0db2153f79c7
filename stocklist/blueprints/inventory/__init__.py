from flask import Blueprint

inventory_bp = Blueprint('inventory', __name__)

# Import routes to register them with the blueprint
from . import routes  # noqa: E402,F401
