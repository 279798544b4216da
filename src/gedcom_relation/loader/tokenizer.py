# src/gedcom_relation/loader/tokenizer.py

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Union

from gedcom_relation.core.exceptions import MalformedLine

BYTE_ORDER_MARK = "\ufeff"

# Cross-reference id between the @ delimiters, shared by declarations and
# pointer values: an alphanumeric followed by anything but @.
XREF_ID = r"[A-Za-z0-9][^@]*"

# <level> [<@xref@>] <tag> [<value>]
# Level is 0 or a one/two digit number without a leading zero.
LINE_PATTERN = re.compile(
    r"""
    ^[ \t]*
    (?P<level>0|[1-9][0-9]?)
    [ ]+
    (?:@(?P<xref>{xref})@[ ]+)?
    (?P<tag>[A-Za-z0-9_]+)
    (?:[ ](?P<value>.*))?
    $
    """.format(xref=XREF_ID),
    re.VERBOSE,
)

# A value that is nothing but a delimited cross-reference id.
POINTER_PATTERN = re.compile(r"^@(?P<xref>{xref})@$".format(xref=XREF_ID))

LINE_BREAK = re.compile(r"\r\n|\n\r|\r|\n")


@dataclass(frozen=True)
class LineRecord:
    """
    A single tokenized GEDCOM line.

    Attributes:
        lineno: 1-based line number in the original document.
        level: Parsed GEDCOM level (0, 1, 2, ...).
        xref_id: Declared cross-reference id without the ``@`` delimiters,
            e.g. ``"I1"`` for ``0 @I1@ INDI``, or None.
        tag: GEDCOM tag, e.g. "INDI", "FAM", "HEAD", "CONC", "CONT".
        value: The line value (everything after the tag and one space), or None.
    """
    lineno: int
    level: int
    xref_id: Optional[str]
    tag: str
    value: Optional[str]

    @property
    def pointer(self) -> Optional[str]:
        """The declared id in its delimited ``@...@`` form."""
        return f"@{self.xref_id}@" if self.xref_id else None


def pointer_target(value: Optional[str]) -> Optional[str]:
    """
    Return the bare id when ``value`` is pointer-shaped (``@I1@`` -> ``I1``).

    Escapes such as ``@#DGREGORIAN@ 1 JAN 1900`` and free text containing
    ``@`` are not pointers.
    """
    if not value:
        return None
    match = POINTER_PATTERN.match(value)
    return match.group("xref") if match else None


def tokenize_line(line: str, lineno: int = 0) -> LineRecord:
    """
    Parse a single physical GEDCOM line into a LineRecord.

    The line must already be stripped of its terminator. Leading spaces or
    tabs before the level are tolerated.

    Examples:
        "0 HEAD"
        "0 @I1@ INDI"
        "1 NAME John /Doe/"
        "1 NOTE This is a note"
    """
    match = LINE_PATTERN.match(line)
    if match is None:
        raise MalformedLine(lineno, line, _diagnose(line))

    value = match.group("value")
    return LineRecord(
        lineno=lineno,
        level=int(match.group("level")),
        xref_id=match.group("xref"),
        tag=match.group("tag"),
        value=value if value else None,
    )


def _diagnose(line: str) -> str:
    """Best-effort reason for a line the grammar rejected."""
    stripped = line.lstrip(" \t")
    head, _, rest = stripped.partition(" ")
    if not head.isdigit():
        return "level is not numeric"
    if len(head) > 1 and head.startswith("0"):
        return "level has a leading zero"
    if len(head) > 2:
        return "level out of range"
    rest = rest.lstrip(" ")
    if not rest:
        return "missing tag after level"
    if rest.startswith("@"):
        close = rest.find("@", 1)
        if close < 2 or not re.fullmatch(XREF_ID, rest[1:close]):
            return "malformed cross-reference id"
        after = rest[close + 1:]
        if not after.strip():
            return "cross-reference id present but missing tag"
    return "invalid tag"


def _iter_physical_lines(text: str) -> Iterator[str]:
    """Yield lines split on CR, LF, CRLF or LFCR without building a list."""
    start = 0
    for match in LINE_BREAK.finditer(text):
        yield text[start : match.start()]
        start = match.end()
    if start < len(text):
        yield text[start:]


def tokenize_text(text: str) -> Iterator[LineRecord]:
    """
    Yield LineRecords for every non-blank line of a GEDCOM document.

    The generator is lazy; calling ``tokenize_text`` again restarts from the
    beginning of the document. A single leading byte-order mark is removed.
    A byte-order mark anywhere else is kept as a literal character, which
    makes the line malformed when it precedes the level and leaves it inside
    the value otherwise.

    Raises:
        MalformedLine: if a non-blank line does not match the grammar.
    """
    if text.startswith(BYTE_ORDER_MARK):
        text = text[len(BYTE_ORDER_MARK):]

    for lineno, line in enumerate(_iter_physical_lines(text), start=1):
        if not line.strip():
            # Blank lines are not meaningful in GEDCOM.
            continue
        yield tokenize_line(line, lineno=lineno)


def read_document(path: Union[str, Path]) -> str:
    """Read a GEDCOM document as text, keeping the original line terminators."""
    file_path = Path(path)

    if not file_path.is_file():
        raise FileNotFoundError(f"GEDCOM file not found: {file_path}")

    with file_path.open("r", encoding="utf-8", errors="replace", newline="") as f:
        return f.read()


def tokenize_file(path: Union[str, Path]) -> Iterator[LineRecord]:
    """
    Yield LineRecords for the GEDCOM document stored at ``path``.

    Raises:
        FileNotFoundError: if `path` does not exist.
        MalformedLine: if a line is syntactically invalid.
    """
    return tokenize_text(read_document(path))
