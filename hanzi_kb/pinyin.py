"""
Numbered pinyin -> tone-mark pinyin.

CC-CEDICT writes pronunciations as numbered syllables ("huo3 shan1"). Readers
expect diacritics ("huǒ shān"), so every syllable is rewritten here:

  - the trailing tone digit is dropped
  - exactly one vowel gets the tone mark
  - syllables without a vowel ("r5", "m2") only lose the digit

Placement rule:
  1) If both "i" and "u" appear, the later of the two takes it:
     jiu3 -> jiǔ, gui4 -> guì. This is checked first, so it also decides
     syllables like huai4 -> huaì.
  2) Otherwise the first of "a", "o", "e", "i", "u" (ü counts as u) present
     takes it.
"""

from __future__ import annotations

from typing import List, Tuple

# vowel -> forms for tones 1..4, plus the unmarked form used for tone 5 / unknown
TONE_MAP = {
    "a": ("ā", "á", "ǎ", "à", "a"),
    "e": ("ē", "é", "ě", "è", "e"),
    "i": ("ī", "í", "ǐ", "ì", "i"),
    "o": ("ō", "ó", "ǒ", "ò", "o"),
    "u": ("ū", "ú", "ǔ", "ù", "u"),
    "ü": ("ǖ", "ǘ", "ǚ", "ǜ", "ü"),
}

# lower wins; ü sorts with u
VOWEL_PRIORITY = {"a": 0, "o": 1, "e": 2, "i": 3, "u": 4, "ü": 4}

TONE_DIGITS = "0123456789"


def _pick_vowel(vowels: List[Tuple[int, str]]) -> Tuple[int, str]:
    """Return (position, vowel) of the vowel that carries the tone mark."""
    letters = {v for _, v in vowels}

    if "i" in letters and "u" in letters:
        return max((pv for pv in vowels if pv[1] in ("i", "u")), key=lambda pv: pv[0])

    # min() keeps the earliest position when two vowels share a priority
    return min(vowels, key=lambda pv: VOWEL_PRIORITY[pv[1]])


def normalize_syllable(syllable: str) -> str:
    """
    Convert one numbered syllable to tone-mark form.

    Examples:
      "san1" -> "sān"
      "liu2" -> "liú"
      "lu:e4" -> "lüè"
      "de5" -> "de"
      "huǒ" -> "huǒ"  (no trailing digit: returned unchanged)
    """
    if not syllable or syllable[-1] not in TONE_DIGITS:
        return syllable

    tone = int(syllable[-1])
    body = syllable[:-1].replace("u:", "ü").replace("U:", "Ü")

    vowels = [(i, ch.lower()) for i, ch in enumerate(body) if ch.lower() in TONE_MAP]
    if not vowels:
        return body

    pos, vowel = _pick_vowel(vowels)
    forms = TONE_MAP[vowel]
    marked = forms[tone - 1] if 1 <= tone <= 4 else forms[4]
    if body[pos].isupper():
        marked = marked.upper()

    return body[:pos] + marked + body[pos + 1:]


def normalize_syllables(pinyin: str) -> List[str]:
    """Split a whitespace-separated pronunciation and normalize each syllable."""
    return [normalize_syllable(s) for s in pinyin.split()]


def normalize_pinyin(pinyin: str) -> str:
    """
    Normalize a full pronunciation string.

    "huo3 shan1" -> "huǒ shān"
    """
    return " ".join(normalize_syllables(pinyin))
