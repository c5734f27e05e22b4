# app/schemas/member.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field


# Данные регистрации, которые приходят от клиента
class MemberRegister(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    full_name: str = Field(min_length=1, description="Полное имя")
    email: EmailStr
    messenger_id: str = Field(min_length=1, description="chat_id или @username в мессенджере")
    address: str = Field(min_length=1)
    # Токен из партнерской ссылки. Неизвестный токен не мешает регистрации.
    referrer_token: str | None = None


class Member(BaseModel):
    id: int
    full_name: str
    email: EmailStr
    messenger_id: str
    address: str
    referrer_id: int | None
    affiliate_token: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MemberActiveUpdate(BaseModel):
    is_active: bool
