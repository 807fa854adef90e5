"""
Answer modality detection.

The model's own "modalidade" guess is never trusted; every extracted question
gets its modality recomputed here from the option set and the statement.
"""

import re
from typing import Mapping, Optional

from ..models.enums import Modality

TRUE_FALSE_STATEMENT = re.compile(
    r"certo.*errado|errado.*certo|verdadeiro.*falso|falso.*verdadeiro"
    r"|correct.*incorrect|incorrect.*correct|true.*false|false.*true|C/E|V/F",
    re.IGNORECASE,
)

TRUE_FALSE_OPTION = re.compile(
    r"certo|errado|verdadeiro|falso|correct|incorrect|true|false",
    re.IGNORECASE,
)


def classify_modality(options: Optional[Mapping[str, object]], statement: Optional[str]) -> Modality:
    """
    Label a question as true/false or multiple choice.

    A question is TRUE_FALSE only when exactly two options are populated and
    either the statement pairs "certo/errado" or "verdadeiro/falso" (in either
    order) or uses the C/E or V/F shorthand, or options A and B themselves
    carry those words. Everything else,
    including a missing option set, is MULTIPLE_CHOICE.
    """
    if not options or not isinstance(options, Mapping):
        return Modality.MULTIPLE_CHOICE

    populated = [letter for letter, text in options.items() if _has_text(text)]
    if len(populated) != 2:
        return Modality.MULTIPLE_CHOICE

    if statement and TRUE_FALSE_STATEMENT.search(statement):
        return Modality.TRUE_FALSE

    option_a, option_b = options.get("A"), options.get("B")
    if _has_text(option_a) and _has_text(option_b):
        if TRUE_FALSE_OPTION.search(f"{option_a}{option_b}"):
            return Modality.TRUE_FALSE

    return Modality.MULTIPLE_CHOICE


def _has_text(value) -> bool:
    return value is not None and bool(str(value).strip())
