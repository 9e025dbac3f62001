"""Run registry compatibility checks for one checking context."""

import logging
from typing import List, Protocol

from .context import CheckingContext, CompatibilityResult
from .lazy import LazyValue
from .resolver import ParsingNamespace

logger = logging.getLogger(__name__)


class SchemaRegistry(Protocol):
    """Registry operations the check run depends on.

    Implementations raise RemoteError on transport or service failure.
    """

    def list_all_subjects(self) -> List[str]:
        ...

    def test_compatibility(self, subject_name: str, schema_json: str) -> bool:
        ...


def evaluate_compatibility(
    context: CheckingContext,
    client: LazyValue[SchemaRegistry],
    namespace: ParsingNamespace,
) -> CheckingContext:
    """Check the context's schema against each matching subject, in order.

    A context without matching subjects gets no results and causes no
    registry call. Registry failures propagate and abort the run.
    """
    if not context.matching_subjects:
        return context
    if context.schema is None:
        raise RuntimeError(f"Schema not resolved for {context.file.path}")

    schema_json = namespace.to_registry_json(context.schema)
    for subject_name in context.matching_subjects:
        logger.debug("Testing %s against subject %s", context.full_type_name, subject_name)
        compatible = client.get().test_compatibility(subject_name, schema_json)
        context.add_result(CompatibilityResult(subject_name, context.schema, compatible))
        if not compatible:
            logger.debug(
                "Incompatibility found between schema file %s and registry subject %s",
                context.file.path,
                subject_name,
            )
    return context
