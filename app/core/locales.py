# app/core/locales.py

# Приветствие нового участника
WELCOME_EMAIL = (
    "Добро пожаловать в партнерскую программу, <b>{name}</b>!\n"
    "Ваша партнерская ссылка: {link}"
)
WELCOME_MESSAGING = "👋 {name}, добро пожаловать! Приглашайте друзей по ссылке: {link}"

# Уведомление пригласившему о новом участнике
REFERRAL_JOINED_EMAIL = "Отличные новости! <b>{name}</b> зарегистрировался по вашей партнерской ссылке."
REFERRAL_JOINED_MESSAGING = "🎉 Новый реферал: <b>{name}</b> присоединился к вашей сети!"

# Подтверждение покупки
PURCHASE_CONFIRMATION = "✅ Покупка оформлена: <b>{product}</b> на сумму <b>{amount}</b>."

# Уведомление пригласившему о покупке реферала
REFERRAL_PURCHASE = "💰 Ваш реферал <b>{name}</b> совершил покупку: <b>{product}</b> на сумму <b>{amount}</b>."
