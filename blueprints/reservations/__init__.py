"""
Reservations blueprint.
Split into member routes (routes.py) and administrator routes (admin.py).
"""

from flask import Blueprint

reservations_bp = Blueprint('reservations', __name__)

from blueprints.reservations import routes
from blueprints.reservations import admin

routes.register_routes(reservations_bp)
admin.register_routes(reservations_bp)
