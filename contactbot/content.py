"""Static texts and keyboards shown by the bot."""

from __future__ import annotations

from typing import Any

# Callback data
CB_START = "start"
CB_BACK = "back"
CB_ABOUT = "about"
CB_FAQ = "faq"
CB_CONTACT = "contact"
CB_LEAVE_CONTACT = "leave_contact"

WELCOME_TEXT = """👋🏻 Добро пожаловать в Pro-traffic.

Чтобы оставить заявку на продвижение,
нажмите кнопку ниже — мы напишем вам в Telegram.

Если нужно задать вопрос или связаться с менеджером,
используйте соответствующий раздел.

Без звонков и навязывания."""

ABOUT_TEXT = """Pro-traffic — это новая модель продвижения бизнеса в цифровом маркетинге.

Наша миссия — сделать маркетинг доступным
и экономически оправданным для малого и среднего бизнеса.

Мы убрали всё, что раздувает стоимость услуг:
посредников, лишние роли и уровни согласований.

В проекте участвуют только те,
кто напрямую влияет на результат:
вы, ваш бизнес, ИИ и специалисты,
которые реально работают над продвижением."""

FAQ_TITLE = "Частые вопросы:"

CONTACT_PROMPT = "Нажмите кнопку ниже, чтобы отправить контакт."
CONTACT_BUTTON = "📞 Отправить контакт"
CONTACT_THANKS = "Спасибо. Менеджер свяжется с вами в Telegram."

REMINDER_TEXT = """Напоминаем, что вы можете задать вопрос по рекламе.

Если решите оставить заявку —
для вас действует разовая скидка 10%.

Промокод: protraff-2026
Просто укажите его менеджеру при общении."""

# callback data -> (button label, answer)
FAQ: dict[str, tuple[str, str]] = {
    "faq_1": (
        "Как устроена работа",
        """Мы работаем по компактной и эффективной модели.

В проекте участвуют:
— ИИ для анализа ниши, конкурентов и офферов
— таргетолог как технический специалист
— маркетолог, отвечающий за стратегию и воронку
— ИИ-инструменты для создания и тестирования креативов

Без лишних ролей и посредников.""",
    ),
    "faq_2": (
        "Почему нет менеджеров",
        """Такие роли оправданы при масштабировании крупных команд.

Для малого и среднего бизнеса
они часто увеличивают стоимость,
не влияя напрямую на результат.

Мы выстроили процесс
с прямой и понятной коммуникацией
между бизнесом и специалистами.""",
    ),
    "faq_3": (
        "Почему ИИ, а не дизайнер",
        """ИИ — это рациональный инструмент.

Он позволяет быстрее создавать креативы,
тестировать больше гипотез
и направлять бюджет в рекламу,
а не в содержание штата.""",
    ),
    "faq_4": (
        "Подойдёт ли формат",
        """Формат подойдёт,
если у вас малый или средний бизнес
и нужен понятный запуск рекламы
без перегруженных процессов.""",
    ),
    "faq_5": (
        "Что после заявки",
        """После того как вы оставите контакт,
менеджер свяжется с вами в Telegram.

Мы уточним задачу
и предложим дальнейшие шаги.

Без звонков и навязывания.""",
    ),
}


def _button(label: str, data: str) -> dict[str, str]:
    return {"text": label, "callback_data": data}


def _inline(*rows: list[dict[str, str]]) -> dict[str, Any]:
    return {"inline_keyboard": list(rows)}


def main_menu() -> dict[str, Any]:
    return _inline(
        [_button("🚀 Оставить заявку", CB_LEAVE_CONTACT)],
        [_button("❓ FAQ", CB_FAQ), _button("ℹ️ О компании", CB_ABOUT)],
    )


def back_menu() -> dict[str, Any]:
    return _inline([_button("⬅️ Назад", CB_BACK)])


def faq_menu() -> dict[str, Any]:
    rows = [[_button(label, data)] for data, (label, _) in FAQ.items()]
    rows.append([_button("⬅️ Назад", CB_BACK)])
    return _inline(*rows)


def reminder_menu() -> dict[str, Any]:
    return _inline([_button("🚀 Оставить заявку", CB_LEAVE_CONTACT)])


def contact_request_keyboard() -> dict[str, Any]:
    return {
        "keyboard": [[{"text": CONTACT_BUTTON, "request_contact": True}]],
        "resize_keyboard": True,
        "one_time_keyboard": True,
    }


def remove_keyboard() -> dict[str, Any]:
    return {"remove_keyboard": True}
