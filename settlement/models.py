from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class SplitType(str, Enum):
    EVEN = "even"
    UNEVEN = "uneven"
    PERCENTAGE = "percentage"
    ITEMIZED = "itemized"


class StrategyName(str, Enum):
    PAIRWISE = "pairwise"
    AGGREGATE = "aggregate"


class Participant(BaseModel):
    id: str = Field(..., min_length=1)
    display_name: str = ""

    model_config = ConfigDict(frozen=True)


class Split(BaseModel):
    participant_id: str
    amount: Decimal

    model_config = ConfigDict(frozen=True)


class Expense(BaseModel):
    payer_id: str
    amount: Decimal
    split_type: SplitType
    splits: tuple[Split, ...] = ()
    description: Optional[str] = None

    model_config = ConfigDict(frozen=True, json_schema_extra={
        "example": {
            "payer_id": "alice",
            "amount": "30.00",
            "split_type": "even",
            "splits": [
                {"participant_id": "alice", "amount": "10.00"},
                {"participant_id": "bob", "amount": "10.00"},
                {"participant_id": "carol", "amount": "10.00"},
            ],
            "description": "Dinner",
        }
    })

    def owed_by_others(self) -> Decimal:
        return sum(
            (s.amount for s in self.splits if s.participant_id != self.payer_id),
            Decimal("0"),
        )

    def split_total(self) -> Decimal:
        return sum((s.amount for s in self.splits), Decimal("0"))


class Settlement(BaseModel):
    debtor_id: str
    creditor_id: str
    amount: Decimal

    model_config = ConfigDict(frozen=True)


class ParticipantBalance(BaseModel):
    participant_id: str
    display_name: str
    paid: Decimal
    owed: Decimal
    net: Decimal


class Dish(BaseModel):
    amount: Decimal
    shared_by: list[str] = Field(default_factory=list)


class SplitRequest(BaseModel):
    payer_id: str
    amount: Decimal
    split_type: SplitType
    participant_ids: list[str] = Field(default_factory=list, description="Payees of an even split")
    amounts: dict[str, Decimal] = Field(default_factory=dict, description="Per-participant amounts of an uneven split")
    percentages: dict[str, Decimal] = Field(default_factory=dict, description="Per-participant percentages")
    dishes: list[Dish] = Field(default_factory=list, description="Items of an itemized split")
    spread_remainder: bool = Field(default=True, description="Distribute tax/tip left over after dishes")
    description: Optional[str] = None

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "payer_id": "alice",
            "amount": "100.00",
            "split_type": "percentage",
            "percentages": {"alice": "33.33", "bob": "33.33", "carol": "33.34"},
        }
    })


class SettlementRequest(BaseModel):
    participants: list[Participant]
    expenses: list[Expense] = Field(default_factory=list)
    strategy: Optional[StrategyName] = None


class SettlementResponse(BaseModel):
    strategy: StrategyName
    settlements: list[Settlement]


class GroupBalancesResponse(BaseModel):
    obligations: dict[str, Decimal]
    reduced_obligations: dict[str, Decimal]
    settlements: list[Settlement]


class SettlementReport(BaseModel):
    balances: list[ParticipantBalance]
    settlements: list[Settlement]
    total_spent: Decimal
    expense_count: int
