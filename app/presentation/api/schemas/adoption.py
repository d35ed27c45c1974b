from pydantic import BaseModel

from ....domain.models import AdoptionStatus


class AdoptionStatusPayload(BaseModel):
    status: AdoptionStatus
