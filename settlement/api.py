from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

from .config import configure_logging, get_settings
from .errors import DegenerateSplit, InvalidExpenseData, SplitMismatch
from .models import (
    Expense, GroupBalancesResponse, SettlementReport,
    SettlementRequest, SettlementResponse, SplitRequest,
)
from .service import SettlementService

settings = get_settings()
configure_logging(settings)

app = FastAPI(
    title="Group Settlement API",
    description="Splits shared expenses and computes who owes whom within a group",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

settlement_service = SettlementService(settings)


def _rejected(e: Exception) -> HTTPException:
    if isinstance(e, InvalidExpenseData):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@app.get("/health", tags=["System"])
def health_check():
    return {"status": "healthy", "service": "group-settlement"}


@app.post("/splits", response_model=Expense, tags=["Splits"])
def split_expense(request: SplitRequest) -> Expense:
    try:
        return settlement_service.split_expense(request)
    except (InvalidExpenseData, SplitMismatch, DegenerateSplit) as e:
        raise _rejected(e)


@app.post("/settlements/group", response_model=GroupBalancesResponse, tags=["Settlements"])
def who_owes_whom(request: SettlementRequest) -> GroupBalancesResponse:
    try:
        return settlement_service.who_owes_whom(request)
    except (InvalidExpenseData, SplitMismatch, DegenerateSplit) as e:
        raise _rejected(e)


@app.post("/settlements/report", response_model=SettlementReport, tags=["Settlements"])
def settlement_report(request: SettlementRequest) -> SettlementReport:
    try:
        return settlement_service.settlement_report(request)
    except (InvalidExpenseData, SplitMismatch, DegenerateSplit) as e:
        raise _rejected(e)


@app.post("/settlements", response_model=SettlementResponse, tags=["Settlements"])
def settle(request: SettlementRequest) -> SettlementResponse:
    try:
        return settlement_service.settle(request)
    except (InvalidExpenseData, SplitMismatch, DegenerateSplit) as e:
        raise _rejected(e)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
