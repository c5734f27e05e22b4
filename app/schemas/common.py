# app/schemas/common.py
from decimal import Decimal
from typing import Annotated

from pydantic import PlainSerializer

# Деньги внутри приложения - Decimal, в JSON отдаем числом, а не строкой
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(v), return_type=float, when_used="json"),
]
