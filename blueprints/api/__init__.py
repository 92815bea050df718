"""
JSON API package.
Split into smaller modules by concern for maintainability.
"""

from flask import Blueprint

# Create the API blueprint
api_bp = Blueprint('api', __name__)

# Import and register routes from submodules
from blueprints.api import routes
from blueprints.api import bookings
from blueprints.api import insights

# Register all route functions on the blueprint
routes.register_routes(api_bp)
bookings.register_routes(api_bp)
insights.register_routes(api_bp)
