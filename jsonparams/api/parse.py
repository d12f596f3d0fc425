from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from jsonparams.services.parameters import get_parameters, get_request_parameters

router = APIRouter(tags=["parse"])


@router.api_route("/parse", methods=["POST", "PUT", "PATCH"])
async def parse(
    request_parameters: dict[str, Any] = Depends(get_request_parameters),
    parameters: dict[str, Any] = Depends(get_parameters),
) -> dict[str, Any]:
    return {"request_parameters": request_parameters, "parameters": parameters}
