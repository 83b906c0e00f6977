"""
Ukrainian user-facing messages.
"""

DAY_NAMES = {
    1: "Понеділок",
    2: "Вівторок",
    3: "Середа",
    4: "Четвер",
    5: "П'ятниця",
    6: "Субота",
    7: "Неділя",
}

MESSAGES = {
    # Generation
    "lessons_generated": "Заняття успішно згенеровано",
    "invalid_weeks_ahead": "Кількість тижнів має бути цілим числом від {min} до {max}",
    "group_not_found": "Групу не знайдено",
    "group_not_active": "Група неактивна, заняття не генеруються",
    "group_missing_weekly_day": "У групи не вказано день тижня",
    "group_invalid_weekly_day": "Невірний день тижня групи: {value}",
    "group_missing_start_time": "У групи не вказано час початку",
    "group_invalid_start_time": "Невірний час початку групи: {value}",
    "group_invalid_duration": "Невірна тривалість заняття групи: {value}",
    "lesson_insert_failed": "Не вдалося зберегти заняття",
    # Schedule
    "invalid_date_range": "Дата завершення не може бути раніше дати початку",
    # Lessons
    "lesson_not_found": "Заняття не знайдено",
    "lesson_already_canceled": "Заняття вже скасовано",
    "lesson_canceled": "Заняття скасовано",
    "lesson_cancel_default_reason": "Скасовано",
    "lesson_canceled_cannot_complete": "Скасоване заняття не можна позначити проведеним",
    "lesson_done": "Заняття проведено",
    "lesson_topic_updated": "Тему заняття оновлено",
    "lesson_rescheduled": "Заняття перенесено",
    "lesson_date_taken": "У групи вже є заняття на {date}",
    # Generic
    "store_unavailable": "База даних недоступна",
    "internal_error": "Сталася внутрішня помилка. Спробуйте пізніше.",
}


def t(key: str, **kwargs) -> str:
    """Look up a message and format it with the given values."""
    message = MESSAGES[key]
    return message.format(**kwargs) if kwargs else message
