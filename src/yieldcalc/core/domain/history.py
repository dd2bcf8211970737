"""
HistoryRecord — Снапшот расчёта для внешнего хранилища истории

Ядро не читает и не пишет хранилище: оно только формирует запись
(исходные параметры + зафиксированный результат), которую внешний
коллаборатор добавляет в свой список.

Формат записи соответствует JSON Schema core/contracts/schema/history_record.json.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Union

from pydantic import BaseModel, Field

from .requests import LumpSumRequest, PeriodicPlanRequest, SipRequest
from .result import YieldReport

CalculationRequest = Union[LumpSumRequest, PeriodicPlanRequest, SipRequest]


class RecordKind(str, Enum):
    """Тип расчёта"""

    LUMP_SUM = "lump_sum"
    PERIODIC_PLAN = "periodic_plan"
    SIP = "sip"


_KIND_BY_REQUEST = {
    LumpSumRequest: RecordKind.LUMP_SUM,
    PeriodicPlanRequest: RecordKind.PERIODIC_PLAN,
    SipRequest: RecordKind.SIP,
}


class HistoryRecord(BaseModel):
    """Запись истории расчётов (immutable)."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, min_length=1)
    kind: RecordKind
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    request: Dict[str, Any] = Field(..., description="Исходные параметры запроса")
    report: YieldReport = Field(..., description="Зафиксированный результат")

    model_config = {"frozen": True}

    @classmethod
    def from_calculation(cls, request: CalculationRequest, report: YieldReport) -> "HistoryRecord":
        """Снапшот запроса и отчёта."""
        kind = _KIND_BY_REQUEST.get(type(request))
        if kind is None:
            raise TypeError(f"Unsupported request type: {type(request).__name__}")

        return cls(
            kind=kind,
            request=request.model_dump(mode="json"),
            report=report,
        )

    def to_record(self) -> Dict[str, Any]:
        """JSON-совместимый dict для хранилища."""
        return self.model_dump(mode="json")
