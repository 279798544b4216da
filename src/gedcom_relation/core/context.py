from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from gedcom_relation.registry import Finding


@dataclass
class ParseContext:
    """
    Shared pipeline context for a single-file run.
    This object is passed between orchestration layers.
    """

    config: Any
    logger: Any

    input_path: Optional[str] = None
    output_path: Optional[str] = None

    stats: Dict[str, int] = field(default_factory=dict)
    findings: List[Finding] = field(default_factory=list)

    debug: bool = False


@dataclass
class ConversionResult:
    """
    Outcome of converting one document that did not abort.

    ``document`` is the schema-shaped dict; ``findings`` lists every field
    the model builder had to leave empty.
    """

    source: str
    document: Dict[str, Any]
    findings: List[Finding] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)


@dataclass
class DocumentOutcome:
    """
    Per-file entry of a batch run: either an output path or an error.

    ``error`` is the ConversionError that aborted the document, or the
    OSError raised while reading or writing it.
    """

    input_path: Path
    output_path: Optional[Path] = None
    findings: List[Finding] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchReport:
    directory: Path
    outcomes: List[DocumentOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> List[DocumentOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> List[DocumentOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def finding_count(self) -> int:
        return sum(len(o.findings) for o in self.outcomes)

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0
