"""Lightweight salient-token extraction for task text similarity."""

import re
from collections import Counter
from typing import Optional

ACRONYM_PATTERN = re.compile(r"\b([A-Z][A-Z0-9]{1,5})\b")
HASHTAG_PATTERN = re.compile(r"#(\w+)")
WORD_PATTERN = re.compile(r"\b[a-zA-Z]{3,}\b")
SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+")
NAME_PATTERN = re.compile(r"^[A-Z][a-z]+$")
PUNCTUATION = ",.!?:;\"'()"

MAX_REPEATED_TERMS = 10

COMMON_WORDS = frozenset(w.casefold() for w in """
    I A AN THE AND OR BUT IN ON AT TO FOR OF WITH BY FROM AS IS IT BE ARE WAS
    WERE AM PM VS ETC IE EG OK NO YES IF SO DO US WE HE SHE ME MY UP GO ALL NEW
    OLD WILL CAN MAY SHOULD WOULD COULD MUST HAS HAD HAVE BEEN JUST NOW THEN
    HERE THERE WHEN WHERE WHY HOW WHAT WHICH WHO THIS THAT THESE THOSE SOME ANY
    EACH EVERY BOTH MORE MOST OTHER SUCH ONLY SAME THAN TOO VERY ALSO STILL
    EVEN BACK WELL MUCH MANY MAKE GET SEND CALL EMAIL REVIEW FIX CHECK UPDATE
    MONDAY TUESDAY WEDNESDAY THURSDAY FRIDAY SATURDAY SUNDAY JANUARY FEBRUARY
    MARCH APRIL JUNE JULY AUGUST SEPTEMBER OCTOBER NOVEMBER DECEMBER TODAY
    TOMORROW YESTERDAY
""".split())

STOP_WORDS = frozenset("""
    the a an and or but in on at to for of with by from as is it be are was
    were been being have has had do does did will would could should may might
    must shall can need this that these those you he she we they what which
    who when where why how all each every both few more most other some such
    no nor not only own same so than too very just also now here there
""".split())


def extract_acronyms(text: str) -> frozenset:
    return frozenset(
        match.casefold()
        for match in ACRONYM_PATTERN.findall(text)
        if match.casefold() not in COMMON_WORDS
    )


def extract_hashtags(text: str) -> frozenset:
    return frozenset(tag.casefold() for tag in HASHTAG_PATTERN.findall(text))


def extract_names(text: str) -> frozenset:
    """Pairs of capitalised words that do not open a sentence."""
    names = set()
    for sentence in SENTENCE_SPLIT.split(text):
        words = [w.strip(PUNCTUATION) for w in sentence.split()]
        for first, second in zip(words[1:], words[2:]):
            if not (NAME_PATTERN.match(first) and NAME_PATTERN.match(second)):
                continue
            if first.casefold() in COMMON_WORDS or second.casefold() in COMMON_WORDS:
                continue
            names.add(f"{first} {second}".casefold())
    return frozenset(names)


def extract_repeated_terms(text: str, limit: int = MAX_REPEATED_TERMS) -> frozenset:
    counts = Counter(
        word.casefold()
        for word in WORD_PATTERN.findall(text)
        if word.casefold() not in STOP_WORDS
    )
    repeated = [word for word, count in counts.most_common() if count > 1]
    return frozenset(repeated[:limit])


def extract_salient_tokens(text: Optional[str]) -> frozenset:
    """Acronyms, hashtags, names and repeated terms, lower-cased."""
    if not text or not text.strip():
        return frozenset()
    return (
        extract_acronyms(text)
        | extract_hashtags(text)
        | extract_names(text)
        | extract_repeated_terms(text)
    )
