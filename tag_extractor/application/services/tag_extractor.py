from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Iterable, List, NamedTuple, Optional
import re

from tag_extractor.application.errors import ReportFormatError, StopWordsNotLoadedError
from tag_extractor.application.services.stopwords import StopWordSet
from tag_extractor.application.settings import Settings

# word -> occurrence count; keys are lowercase ASCII letters only
FrequencyTable = Counter

_NON_LETTER = re.compile(r"[^A-Za-z]")

DEFAULT_SEPARATOR = "========================="
UNKNOWN_DOCUMENT = "unknown"


class RankedEntry(NamedTuple):
    word: str
    count: int


def tokenize(line: str) -> List[str]:
    """
    Split a line into lowercase, letters-only words.

    Non-letters become spaces instead of being deleted, so "end.Start"
    yields ["end", "start"] and never "endstart".
    """
    # str.split() with no argument already drops empty / whitespace-only tokens
    return _NON_LETTER.sub(" ", line).lower().split()


def extract(document_lines: Iterable[str], stop_words: Optional[StopWordSet]) -> FrequencyTable:
    """
    Count every non-stop-word token of the document.

    An empty StopWordSet means "filter nothing"; ``None`` means the caller
    never loaded one and is rejected.
    """
    if stop_words is None:
        raise StopWordsNotLoadedError()

    table: FrequencyTable = Counter()
    for line in document_lines:
        for token in tokenize(line):
            if token in stop_words:
                continue
            table[token] += 1
    return table


def compare_entries(a: RankedEntry, b: RankedEntry) -> int:
    """Three-way comparison: higher count first, then word in codepoint order."""
    if a.count != b.count:
        return -1 if a.count > b.count else 1
    if a.word != b.word:
        return -1 if a.word < b.word else 1
    return 0


def rank(table: FrequencyTable) -> List[RankedEntry]:
    entries = [RankedEntry(word, count) for word, count in table.items()]
    return sorted(entries, key=cmp_to_key(compare_entries))


def serialize(ranked: Iterable[RankedEntry], document_name: Optional[str],
              separator: str = DEFAULT_SEPARATOR) -> str:
    """
    Build the saved-report text.

    Layout:
        Tags for file: <document_name>
        =========================
        word : count
        ...
    Every line, including the last, ends with a newline.
    """
    lines = [f"Tags for file: {document_name or UNKNOWN_DOCUMENT}", separator]
    lines.extend(f"{e.word} : {e.count}" for e in ranked)
    return "".join(line + "\n" for line in lines)


def parse_report(text: str) -> List[RankedEntry]:
    """Read back the (word, count) pairs written by ``serialize``, in file order."""
    entries: List[RankedEntry] = []
    # first two lines are the header and the separator
    for line_no, raw in enumerate(text.splitlines()[2:], start=3):
        line = raw.strip()
        if not line:
            continue
        word, sep, count = line.partition(" : ")
        # isdigit() alone also accepts things like "²" that int() rejects
        if not sep or not word or not (count.isascii() and count.isdigit()):
            raise ReportFormatError(f"line {line_no}: expected 'word : count', got {raw!r}")
        entries.append(RankedEntry(word, int(count)))
    return entries


@dataclass
class TagExtractorService:
    """
    Tokenize → filter → count → rank, plus display and file renderings.

    All methods are pure: the service keeps no state between calls, the
    caller passes the StopWordSet and FrequencyTable around explicitly.
    """

    separator: str = DEFAULT_SEPARATOR
    word_width: int = 20

    @classmethod
    def from_settings(cls, settings: Settings) -> "TagExtractorService":
        return cls(separator=settings.report_separator, word_width=settings.display_word_width)

    def tokenize(self, line: str) -> List[str]:
        return tokenize(line)

    def extract(self, document_lines: Iterable[str], stop_words: Optional[StopWordSet]) -> FrequencyTable:
        return extract(document_lines, stop_words)

    def rank(self, table: FrequencyTable) -> List[RankedEntry]:
        return rank(table)

    def format(self, ranked: List[RankedEntry]) -> List[str]:
        """Display report: header, separator, one padded line per entry, total."""
        lines = ["Tags (word : frequency)", self.separator]
        lines.extend(f"{e.word:<{self.word_width}} : {e.count}" for e in ranked)
        lines.append("")
        lines.append(f"Total distinct tags: {len(ranked)}")
        return lines

    def serialize(self, ranked: Iterable[RankedEntry], document_name: Optional[str]) -> str:
        return serialize(ranked, document_name, separator=self.separator)

    def parse_report(self, text: str) -> List[RankedEntry]:
        return parse_report(text)


__all__ = [
    "FrequencyTable",
    "RankedEntry",
    "TagExtractorService",
    "compare_entries",
    "extract",
    "parse_report",
    "rank",
    "serialize",
    "tokenize",
]
