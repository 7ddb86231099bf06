"""Numbers and month numbers rendered as words for contract text."""

import calendar
import logging
from typing import Any, Optional, Union

from num2words import num2words

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "ru"

RUSSIAN_MONTHS_GENITIVE = (
    "января", "февраля", "марта", "апреля", "мая", "июня",
    "июля", "августа", "сентября", "октября", "ноября", "декабря",
)
RUSSIAN_MONTHS_NOMINATIVE = (
    "январь", "февраль", "март", "апрель", "май", "июнь",
    "июль", "август", "сентябрь", "октябрь", "ноябрь", "декабрь",
)


def to_number(value: Any) -> Optional[Union[int, float]]:
    """Coerce a field value to a number, or None when it is not numeric.

    Booleans count as 1 and 0.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        number = int(value)
    elif isinstance(value, (int, float)):
        number = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None

    if isinstance(number, float):
        if number != number or number in (float("inf"), float("-inf")):
            return None
        if number.is_integer():
            return int(number)
    return number


def number_to_words(value: Any, lang: str = DEFAULT_LANGUAGE) -> str:
    """Cardinal number in words, '' when the value is not a number."""
    number = to_number(value)
    if number is None:
        logger.debug(f"Value {value!r} is not numeric, no words produced")
        return ""

    try:
        return num2words(number, lang=lang)
    except (NotImplementedError, OverflowError, ValueError, TypeError) as e:
        logger.debug(f"num2words could not render {number!r} in '{lang}': {e}")
        return ""


def month_name(value: Any, lang: str = DEFAULT_LANGUAGE, grammatical_case: str = "genitive") -> str:
    """Name of month 1..12; Russian defaults to the genitive used in dates."""
    number = to_number(value)
    if not isinstance(number, int) or not 1 <= number <= 12:
        return ""

    if lang == "ru":
        months = RUSSIAN_MONTHS_NOMINATIVE if grammatical_case == "nominative" else RUSSIAN_MONTHS_GENITIVE
        return months[number - 1]
    return calendar.month_name[number]
