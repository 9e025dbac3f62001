"""compatgate: schema registry compatibility gate for local Avro schemas."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("compatgate")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from compatgate.api import check_compatibility
from compatgate.config import CheckConfig, FileSet, load_config
from compatgate.contracts import CheckIssue, CheckReport, Incompatibility, SchemaFileSummary
from compatgate.codes import CheckCode
from compatgate.kernel.errors import CompatibilityCheckError, RemoteError, ResolutionError

__all__ = [
    "__version__",
    "check_compatibility",
    "CheckConfig",
    "FileSet",
    "load_config",
    "CheckReport",
    "CheckIssue",
    "Incompatibility",
    "SchemaFileSummary",
    "CheckCode",
    "CompatibilityCheckError",
    "RemoteError",
    "ResolutionError",
]
