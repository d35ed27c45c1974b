from typing import Any, Dict

from fastapi import APIRouter, Depends

from ....core.dependencies import get_mock_data_service
from ....domain.models import IdentityContext
from ....services.mock_data_service import MockDataService
from ...api.dependencies import require_admin
from ...api.schemas.mocks import GenerateDataPayload

router = APIRouter(prefix="/api/mocks", tags=["Mocks"])


@router.get("/mockingpets")
async def mocking_pets(service: MockDataService = Depends(get_mock_data_service)) -> Dict[str, Any]:
    return {"status": "success", "payload": service.generate_pets(100)}


@router.get("/mockingusers")
def mocking_users(service: MockDataService = Depends(get_mock_data_service)) -> Dict[str, Any]:
    return {"status": "success", "payload": service.generate_users(50)}


@router.post("/generateData")
def generate_data(
    payload: GenerateDataPayload,
    _: IdentityContext = Depends(require_admin),
    service: MockDataService = Depends(get_mock_data_service),
) -> Dict[str, Any]:
    counts = service.seed(users=payload.users, pets=payload.pets)
    return {"status": "success", "payload": counts}
