#!/usr/bin/env python3
"""
SECURE TOKEN GENERATOR - Human-typable codes and temporary passwords

Uses the ``secrets`` module throughout. Visually confusable characters
(0, O, I, 1, L) never appear. Uniqueness is not guaranteed here; callers
retry on collision (see services.progress).
"""

import secrets

from .models.records import WeeklyGrade
from .weeks import GRADE_PREFIXES

CONFUSABLE_CHARACTERS = frozenset("0OI1L")

CODE_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"

PASSWORD_UPPERCASE = "ABCDEFGHJKMNPQRSTUVWXYZ"
PASSWORD_LOWERCASE = "abcdefghjkmnpqrstuvwxyz"
PASSWORD_DIGITS = "23456789"
PASSWORD_SYMBOLS = "!@#$%^&*"
PASSWORD_CHARACTER_CLASSES = (
    PASSWORD_UPPERCASE,
    PASSWORD_LOWERCASE,
    PASSWORD_DIGITS,
    PASSWORD_SYMBOLS,
)

INVITE_CODE_PREFIX = "SP"
INVITE_CODE_LENGTH = 8
WEEKLY_CODE_LENGTH = 4
TEMP_PASSWORD_LENGTH = 12


def random_string(length: int, alphabet: str = CODE_ALPHABET) -> str:
    """``length`` characters drawn uniformly from ``alphabet``"""
    if length < 1:
        raise ValueError(f"Code length must be at least 1, got: {length}")
    return "".join(secrets.choice(alphabet) for _ in range(length))


def generate_access_code(prefix: str, length: int, alphabet: str = CODE_ALPHABET) -> str:
    """Access code formatted as PREFIX-XXXX"""
    return f"{prefix}-{random_string(length, alphabet)}"


def generate_invite_code(
    prefix: str = INVITE_CODE_PREFIX, length: int = INVITE_CODE_LENGTH
) -> str:
    """Registration invite code, e.g. SP-7KXM2QHD"""
    return generate_access_code(prefix, length)


def generate_weekly_code(grade: WeeklyGrade, length: int = WEEKLY_CODE_LENGTH) -> str:
    """Weekly verification code for a class grade, e.g. G2-X7RM"""
    return generate_access_code(GRADE_PREFIXES[WeeklyGrade(grade)], length)


def generate_temp_password(length: int = TEMP_PASSWORD_LENGTH) -> str:
    """
    Temporary password with at least one uppercase, lowercase, digit and symbol

    One character per class is seeded, the rest are drawn from the union of all
    classes, then the whole password is shuffled so the seeded characters do
    not sit at predictable positions.
    """
    if length < len(PASSWORD_CHARACTER_CLASSES):
        raise ValueError(
            f"Password length must be at least {len(PASSWORD_CHARACTER_CLASSES)}, got: {length}"
        )

    all_characters = "".join(PASSWORD_CHARACTER_CLASSES)

    characters = [secrets.choice(character_class) for character_class in PASSWORD_CHARACTER_CLASSES]
    characters.extend(
        secrets.choice(all_characters)
        for _ in range(length - len(PASSWORD_CHARACTER_CLASSES))
    )
    secrets.SystemRandom().shuffle(characters)
    return "".join(characters)
