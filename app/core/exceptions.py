# app/core/exceptions.py
"""
Доменные исключения партнерской программы.

ValidationError, NotFoundError и ConflictError означают ошибку вызывающей
стороны и пробрасываются наверх (роутеры превращают их в 422/404/409).
DeliveryFailure никогда не выходит за пределы диспетчера уведомлений.
"""


class AffiliateError(Exception):
    """Базовое исключение домена."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AffiliateError):
    """Некорректные входные данные. Выбрасывается до любой записи в БД."""

    def __init__(self, message: str, errors: list | None = None):
        super().__init__(message)
        self.errors = errors or []


class ConflictError(AffiliateError):
    """Нарушение уникальности (email или партнерский токен)."""


class NotFoundError(AffiliateError):
    """Участник (или другая сущность), нужный операции, не существует."""

    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class DeliveryFailure(AffiliateError):
    """Канал доставки не смог отправить сообщение."""

    def __init__(self, channel: str, reason: str):
        super().__init__(f"{channel} delivery failed: {reason}")
        self.channel = channel
        self.reason = reason
