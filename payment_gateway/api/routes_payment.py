from typing import Any
from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from payment_gateway.api.deps import get_easy_money_orchestrator, get_super_walletz_orchestrator
from payment_gateway.db.core import get_db_session
from payment_gateway.schemas.payment import EasyMoneyPaymentResponse, ErrorResponse, SuperWalletzPaymentResponse
from payment_gateway.services.payment_orchestrator import PaymentOrchestrator

router = APIRouter()

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


@router.post("/easy-money", response_model=EasyMoneyPaymentResponse, responses=ERROR_RESPONSES)
async def pay_with_easy_money(payload: Any = Body(default=None),
                              db: AsyncSession = Depends(get_db_session),
                              orchestrator: PaymentOrchestrator = Depends(get_easy_money_orchestrator)):
    # body is validated by the orchestrator so errors share one shape
    result = await orchestrator.pay(db, payload)
    return EasyMoneyPaymentResponse(message=result.message, data="Successfully")


@router.post("/super-walletz", response_model=SuperWalletzPaymentResponse, responses=ERROR_RESPONSES)
async def pay_with_super_walletz(payload: Any = Body(default=None),
                                 db: AsyncSession = Depends(get_db_session),
                                 orchestrator: PaymentOrchestrator = Depends(get_super_walletz_orchestrator)):
    result = await orchestrator.pay(db, payload)
    return SuperWalletzPaymentResponse(message=result.message, transaction_id=result.transaction_id)
