from .health_check.view import router as health_check_router
from .logs.view import router as log_router

routers = (
    health_check_router,
    log_router,
)
