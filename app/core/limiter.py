# app/core/limiter.py

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

# Лимиты считаются по IP-адресу клиента, счетчики хранятся в памяти процесса.
# 'moving-window' - гибкий и точный алгоритм.
limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.RATE_LIMIT_ENABLED,
    strategy="moving-window",
)
