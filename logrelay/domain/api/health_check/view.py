from fastapi import APIRouter
from fastapi_utils.cbv import cbv

router = APIRouter()


@cbv(router)
class HealthCheck:
    @router.get("/health")
    def get(self):
        return {"status": "success"}
