from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, Field

from fichajes.domain.competitions import DEFAULT_COMPETITION
from fichajes.domain.errors import ExtractionFailed, InvalidCompetitionError
from fichajes.domain.transfers import TransferRecord
from fichajes.services.transfers import TransferService

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["transfers"])

transfer_service = TransferService()


def get_transfer_service() -> TransferService:
    return transfer_service


class TransferOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    player: str = ""
    from_: str = Field(default="", alias="from")
    to: str = ""
    date: str = ""
    status: str = ""
    position: str = ""
    fee: str = ""
    contract: str = ""
    url: str = ""
    source: str = ""
    fallback: Optional[bool] = Field(default=None, alias="__fallback")

    @classmethod
    def from_record(cls, record: TransferRecord) -> TransferOut:
        return cls.model_validate(record.as_dict())


@router.get(
    "/laliga-transfers",
    response_model=List[TransferOut],
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
def laliga_transfers(
    comp: str = Query(default=DEFAULT_COMPETITION),
    service: TransferService = Depends(get_transfer_service),
) -> List[TransferOut]:
    competition = comp.strip()
    try:
        records = service.get_transfers(competition)
    except InvalidCompetitionError as exc:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Parámetro comp inválido") from exc
    except ExtractionFailed as exc:
        LOGGER.error("laliga-transfers error (%s): %s", competition, exc)
        raise HTTPException(status.HTTP_502_BAD_GATEWAY, str(exc)) from exc
    return [TransferOut.from_record(r) for r in records]


__all__ = ["TransferOut", "get_transfer_service", "router", "transfer_service"]
