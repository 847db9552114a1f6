# scramble/core/cipher.py
from typing import Dict, List, Tuple

from loguru import logger

from .pcg import PCG128
from .shuffle import derange

VOWELS = frozenset("aeiou")


def letter_classes(text: str) -> Tuple[List[str], List[str]]:
    """Splits the distinct lowercase letters of text into (vowels, consonants), first occurrence first."""
    letters = dict.fromkeys(ch for ch in text.lower() if ch.isalpha())
    vowels = [ch for ch in letters if ch in VOWELS]
    consonants = [ch for ch in letters if ch not in VOWELS]
    return vowels, consonants


def _random_pairs(symbols: List[str], rng: PCG128) -> List[Tuple[str, str]]:
    return list(zip(symbols, derange(symbols, rng)))


def build_mapping(text: str, rng: PCG128) -> Dict[str, str]:
    """
    Derives a substitution table for the letters used in text.

    Vowels are permuted among vowels and consonants among consonants, so the
    cipher keeps the shape of the words. Every lowercase pair also gets its
    uppercase counterpart.
    """
    vowels, consonants = letter_classes(text)
    # vowels draw first; the order is part of the reproducible output
    mapping = dict(_random_pairs(vowels, rng) + _random_pairs(consonants, rng))
    for key, value in list(mapping.items()):
        mapping[key.upper()[0]] = value.upper()[0]
    logger.trace(f"Built mapping over {len(vowels)} vowels and {len(consonants)} consonants")
    return mapping


def apply_mapping(text: str, mapping: Dict[str, str]) -> str:
    return "".join(mapping.get(ch, ch) for ch in text)


def invert_mapping(mapping: Dict[str, str]) -> Dict[str, str]:
    """Reverses a substitution table so ciphertext can be read back with the key."""
    return {value: key for key, value in mapping.items()}


def scramble_text(text: str, rng: PCG128) -> str:
    return apply_mapping(text, build_mapping(text, rng))
