# tests/conftest.py
import os

# Тестовое окружение: письма только в лог, мессенджер через замоканный бот, без лимитов
os.environ.setdefault("EMAIL_DEV_MODE", "true")
os.environ.setdefault("MESSAGING_DEV_MODE", "false")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from unittest.mock import AsyncMock
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.db.session import Base
from app.models import member, referral, purchase, notification, product # Импортируем все модели для создания таблиц
from app.clients.messaging import messaging_client
from app.crud import member as crud_member
from app.crud import referral as crud_referral
from app.dependencies import get_db
from app.main import app

# In-memory SQLite для тестов. StaticPool - одно соединение на все потоки,
# иначе синхронные эндпоинты (threadpool) увидят пустую базу.
SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture(scope="function")
def db_session() -> Session:
    """
    Фикстура для создания чистой базы данных для каждого теста.
    """
    Base.metadata.create_all(bind=engine) # Создаем все таблицы
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine) # Очищаем все после теста

@pytest.fixture(autouse=True)
def mock_bot_send(mocker) -> AsyncMock:
    """Telegram в тестах не вызываем: send_message всегда замокан."""
    return mocker.patch.object(messaging_client.bot, "send_message", new_callable=AsyncMock)

@pytest.fixture
def make_member(db_session):
    """Создает участника напрямую через CRUD, минуя уведомления."""
    counter = {"n": 0}

    def _make(full_name: str = "Test Member", referrer=None, is_active: bool = True, **kwargs):
        counter["n"] += 1
        n = counter["n"]
        db_member = crud_member.create_member(
            db_session,
            full_name=full_name,
            email=kwargs.get("email", f"member{n}@example.com"),
            messenger_id=kwargs.get("messenger_id", f"10000000{n}"),
            address=kwargs.get("address", f"{n} Main St"),
            affiliate_token=kwargs.get("affiliate_token", f"token-{n}"),
            referrer_id=referrer.id if referrer else None,
        )
        if referrer:
            crud_referral.create_referral(db_session, referrer_id=referrer.id, referred_id=db_member.id)
        db_member.is_active = is_active
        db_session.commit()
        db_session.refresh(db_member)
        return db_member

    return _make

@pytest.fixture
def profile_data() -> dict:
    return {
        "full_name": "Jane Doe",
        "email": "jane@example.com",
        "messenger_id": "123456789",
        "address": "1 Market St",
    }

@pytest.fixture
async def client(db_session):
    """HTTP-клиент к приложению с подмененной сессией БД."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
