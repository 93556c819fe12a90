# backend/app/api/routes/__init__.py

from .base import router as base_router
from .health import router as health_router
from .tasks import router as tasks_router
from .unit_tests import router as unit_tests_router

routers = [
    base_router,
    health_router,
    tasks_router,
    unit_tests_router,
]
