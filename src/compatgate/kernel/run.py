"""Coordinate a compatibility check over every discovered schema file.

Per file, in order: build a checking context, resolve its schema against the
run's shared namespace, attach the registry subjects carrying its type name,
and test each subject. Resolution and registry errors abort the whole run;
incompatibilities are collected and decide the outcome only after every file
has been checked.
"""

import logging
import re
from pathlib import Path
from typing import Callable, List, Sequence

from compatgate.codes import CheckCode
from compatgate.contracts import CheckIssue, CheckReport, Incompatibility, SchemaFileSummary

from .context import CheckingContext, SchemaFile
from .evaluator import SchemaRegistry, evaluate_compatibility
from .lazy import LazyValue
from .resolver import ParsingNamespace, read_full_type_name, resolve_schema
from .subjects import SubjectIndex

logger = logging.getLogger(__name__)


class CompatibilityCheckRun:
    """One check run: a single namespace, one registry client, one subject listing."""

    def __init__(
        self,
        schema_paths: Sequence[Path],
        subject_pattern: re.Pattern[str],
        registry_factory: Callable[[], SchemaRegistry],
        load_schema_file: Callable[[Path], SchemaFile],
        imports: Sequence[Path] = (),
    ):
        self.schema_paths = list(schema_paths)
        self.imports = list(imports)
        self.subject_pattern = subject_pattern
        self.load_schema_file = load_schema_file
        self.namespace = ParsingNamespace()
        self.client: LazyValue[SchemaRegistry] = LazyValue(registry_factory)
        self.subject_index: LazyValue[SubjectIndex] = LazyValue(self._fetch_subject_index)
        self.contexts: List[CheckingContext] = []

    def _fetch_subject_index(self) -> SubjectIndex:
        subject_names = self.client.get().list_all_subjects()
        logger.debug("Fetched %d subjects from schema registry", len(subject_names))
        return SubjectIndex(subject_names, self.subject_pattern)

    def execute(self) -> CheckReport:
        if not self.schema_paths:
            logger.warning("No schema files found to be checked for compatibility.")
            return CheckReport(
                ok=True,
                files=[],
                incompatibilities=[],
                warnings=[CheckIssue(
                    code=CheckCode.NO_SCHEMA_FILES.value,
                    message="No schema files found to be checked for compatibility.",
                )],
            )

        for import_path in self.imports:
            self.namespace.load_import(self.load_schema_file(import_path))

        for path in self.schema_paths:
            self.contexts.append(self._check_file(path))

        return self._build_report()

    def _check_file(self, path: Path) -> CheckingContext:
        schema_file = self.load_schema_file(path)
        context = CheckingContext(schema_file, read_full_type_name(schema_file))
        context.set_schema(resolve_schema(schema_file, context.full_type_name, self.namespace))
        context.add_matching_subjects(self.subject_index.get().subjects_for(context.full_type_name))
        return evaluate_compatibility(context, self.client, self.namespace)

    def _build_report(self) -> CheckReport:
        incompatibilities = [
            Incompatibility(
                schema_type=ctx.full_type_name,
                subject=result.subject_name,
                file=str(ctx.file.path),
            )
            for ctx in self.contexts
            for result in ctx.incompatible_results()
        ]
        files = [
            SchemaFileSummary(
                file=ctx.file.name,
                schema_type=ctx.full_type_name,
                matching_subjects=list(ctx.matching_subjects),
                compatible_subjects=len(ctx.compatible_results()),
                incompatible_subjects=len(ctx.incompatible_results()),
            )
            for ctx in self.contexts
        ]

        warnings: List[CheckIssue] = []
        if self.subject_index.resolved:
            for subject_name in self.subject_index.get().unresolved:
                warnings.append(CheckIssue(
                    code=CheckCode.UNRESOLVED_SUBJECT_NAME.value,
                    message=f"Unable to extract full type name from subject [{subject_name}]",
                    subject=subject_name,
                ))
        unchecked = [ctx for ctx in self.contexts if not ctx.results]
        for ctx in unchecked:
            warnings.append(CheckIssue(
                code=CheckCode.NO_SUBJECTS_MATCHED.value,
                message=f"'{ctx.file.name}' was not checked against any schema registry subject",
                file=ctx.file.name,
            ))

        report = CheckReport(
            ok=not incompatibilities,
            files=files,
            incompatibilities=incompatibilities,
            warnings=warnings,
        )

        if report.ok:
            logger.info("Schema checks complete. Following files were checked:")
            for summary in files:
                logger.info(
                    " - '%s' (compatible_subjects=%d, incompatible_subjects=%d)",
                    summary.file,
                    summary.compatible_subjects,
                    summary.incompatible_subjects,
                )
        else:
            logger.error(
                "Compatibility check failed: %d incompatible schema/subject pair(s)",
                len(incompatibilities),
            )

        if unchecked:
            logger.warning(
                "%d local schema(s) were NOT CHECKED against any subject in remote schema registry:\n%s",
                len(unchecked),
                "\n".join(f" - {ctx.file.name}" for ctx in unchecked),
            )
        return report
