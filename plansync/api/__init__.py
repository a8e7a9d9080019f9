from flask import Blueprint

health_bp = Blueprint("Health", __name__)
plans_bp = Blueprint("Plans", __name__)
admin_bp = Blueprint("Admin", __name__)
errors_bp = Blueprint("Errors", __name__)

from . import health  # noqa: F401
from . import plans  # noqa: F401
from . import admin  # noqa: F401
from . import errors  # noqa: F401
