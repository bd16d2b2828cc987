"""
Controllers - one APIRouter per feature
"""
from taskactivity.controllers import admin_query_controller
from taskactivity.controllers import auth_controller
from taskactivity.controllers import dropdown_controller
from taskactivity.controllers import error_controller
from taskactivity.controllers import health_controller
from taskactivity.controllers import login_controller
from taskactivity.controllers import user_profile_controller

__all__ = [
    "admin_query_controller",
    "auth_controller",
    "dropdown_controller",
    "error_controller",
    "health_controller",
    "login_controller",
    "user_profile_controller",
]
