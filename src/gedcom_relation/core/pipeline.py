"""
Document conversion pipeline.

    text -> LineRecords -> GEDCOMTree -> ResolvedGraph -> DomainModel -> schema dict

One document is converted synchronously on one thread. Batches fan out one
document per worker; workers share nothing but the output directory and
every output name is derived from its own input name.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from gedcom_relation.config import get_config
from gedcom_relation.core.context import (
    BatchReport,
    ConversionResult,
    DocumentOutcome,
    ParseContext,
)
from gedcom_relation.core.exceptions import ConversionError
from gedcom_relation.exporter import export_document_json, map_to_schema
from gedcom_relation.loader import build_tree, read_document, tokenize_text
from gedcom_relation.logging import get_logger
from gedcom_relation.registry import build_domain_model
from gedcom_relation.xref import resolve_references

log = get_logger(__name__)

PathLike = Union[str, Path]


# ---------------------------------------------------------------------------
# Single document
# ---------------------------------------------------------------------------

def convert_text(
    text: str,
    source: str = "<string>",
    schema: Optional[Mapping[str, Any]] = None,
) -> ConversionResult:
    """
    Convert one GEDCOM document held in memory.

    Raises:
        ConversionError: any tokenizer, hierarchy or cross-reference error,
            with ``source`` set to the document name.
    """
    try:
        records = list(tokenize_text(text))
        tree = build_tree(records)
        graph = resolve_references(tree)
        model = build_domain_model(graph)
        document = map_to_schema(model, schema)
    except ConversionError as exc:
        if exc.source is None:
            exc.source = source
        log.error("Conversion aborted: %s", exc)
        raise

    stats = {
        "lines": len(records),
        "nodes": len(tree.nodes),
        "records": len(tree.records),
        "depth": tree.depth(),
        "references": graph.reference_count,
        "individuals": len(model.individuals),
        "families": len(model.families),
        "facts": model.fact_count,
        "findings": len(model.findings),
    }
    log.debug("%s: %s", source, stats)

    for finding in model.findings:
        log.debug("%s: %s", source, finding)
    if model.findings:
        log.warning("%s: %d finding(s)", source, len(model.findings))

    return ConversionResult(
        source=source,
        document=document,
        findings=list(model.findings),
        stats=stats,
    )


def output_path_for(input_path: PathLike, suffix: Optional[str] = None) -> Path:
    """``family.ged`` -> ``family.json`` in the same directory."""
    if suffix is None:
        suffix = get_config().pipeline.get("output_suffix", ".json")
    return Path(input_path).with_suffix(suffix)


def convert_file(
    input_path: PathLike,
    output_path: Optional[PathLike] = None,
    indent: Optional[int] = None,
) -> ConversionResult:
    """
    Convert ``input_path`` and write the JSON document.

    Nothing is written when the conversion aborts.
    """
    input_path = Path(input_path)
    target = Path(output_path) if output_path is not None else output_path_for(input_path)

    log.info("Converting %s", input_path)
    result = convert_text(read_document(input_path), source=str(input_path))
    export_document_json(result.document, target, indent=indent)
    return result


# ---------------------------------------------------------------------------
# Batch
# ---------------------------------------------------------------------------

def discover_documents(directory: PathLike, suffixes: Optional[Iterable[str]] = None) -> List[Path]:
    """Return the GEDCOM files directly inside ``directory``, sorted by name."""
    if suffixes is None:
        suffixes = get_config().pipeline.get("input_suffixes", [".ged"])
    wanted = {s.lower() for s in suffixes}

    directory = Path(directory)
    if not directory.is_dir():
        raise NotADirectoryError(f"Not a directory: {directory}")

    return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in wanted)


def _convert_one(input_path: Path, output_path: Path, indent: Optional[int]) -> DocumentOutcome:
    try:
        result = convert_file(input_path, output_path, indent=indent)
    except ConversionError as exc:
        return DocumentOutcome(input_path=input_path, error=exc)
    except OSError as exc:
        log.error("%s: %s", input_path, exc)
        return DocumentOutcome(input_path=input_path, error=exc)
    return DocumentOutcome(
        input_path=input_path,
        output_path=output_path,
        findings=result.findings,
    )


def plan_outputs(inputs: Iterable[Path]) -> List[Tuple[Path, Path, Optional[Path]]]:
    """
    Pair every input with its output path.

    The third item names the earlier input already claiming the same output
    (``t.ged`` and ``t.GED`` both map to ``t.json``), else None.
    """
    claimed: Dict[Path, Path] = {}
    plan = []
    for input_path in inputs:
        output_path = output_path_for(input_path)
        plan.append((input_path, output_path, claimed.get(output_path)))
        claimed.setdefault(output_path, input_path)
    return plan


def convert_directory(
    directory: PathLike,
    workers: Optional[int] = None,
    indent: Optional[int] = None,
) -> BatchReport:
    """
    Convert every GEDCOM file in ``directory`` concurrently.

    Each document succeeds or fails on its own; the report lists outcomes in
    input-name order regardless of completion order. An input whose output
    name is already taken by an earlier input is reported as failed and not
    converted.
    """
    cfg = get_config()
    if workers is None:
        workers = int(cfg.pipeline.get("workers", 4))
    if indent is None:
        indent = cfg.pipeline.get("indent")

    directory = Path(directory)
    inputs = discover_documents(directory)
    report = BatchReport(directory=directory)

    if not inputs:
        log.warning("No GEDCOM files found in %s", directory)
        return report

    log.info("Converting %d file(s) in %s with %d worker(s)", len(inputs), directory, workers)

    plan = plan_outputs(inputs)
    jobs = [(i, o) for i, o, owner in plan if owner is None]

    with ThreadPoolExecutor(max_workers=max(1, workers)) as executor:
        converted = {
            outcome.input_path: outcome
            for outcome in executor.map(lambda job: _convert_one(*job, indent), jobs)
        }

    for input_path, output_path, owner in plan:
        if owner is None:
            report.outcomes.append(converted[input_path])
            continue
        exc = FileExistsError(
            f"{input_path}: output {output_path.name} is already claimed by {owner.name}"
        )
        log.error("%s", exc)
        report.outcomes.append(DocumentOutcome(input_path=input_path, error=exc))

    log.info(
        "Batch complete: %d converted, %d failed, %d finding(s)",
        len(report.succeeded),
        len(report.failed),
        report.finding_count,
    )
    return report


# ---------------------------------------------------------------------------
# Context-driven runner (single-file adapter)
# ---------------------------------------------------------------------------

class Pipeline:
    """
    Orchestrates one input -> output conversion from a ParseContext.
    No business logic lives here.
    """

    def __init__(self, context: ParseContext):
        self.ctx = context
        self.log = context.logger

    def run(self) -> ConversionResult:
        self.log.info("Pipeline starting")

        indent = self.ctx.config.pipeline.get("indent")
        result = convert_file(self.ctx.input_path, self.ctx.output_path, indent=indent)

        self.ctx.stats.update(result.stats)
        self.ctx.findings.extend(result.findings)
        self.log.info("Pipeline completed successfully")
        return result
