from .cancel import RunFlag
from .errors import RigError, RigInitError, RigOpenError, SampleReadError
from .metrics import DerivedMetrics, compute_metrics, format_metrics, normalize
from .tracker import ExtremesState, ExtremesTracker
from .types import KeySource, LineRendererProtocol, SampleSource, SessionStatusDict

__all__ = [
    "DerivedMetrics",
    "ExtremesState",
    "ExtremesTracker",
    "KeySource",
    "LineRendererProtocol",
    "RigError",
    "RigInitError",
    "RigOpenError",
    "RunFlag",
    "SampleReadError",
    "SampleSource",
    "SessionStatusDict",
    "compute_metrics",
    "format_metrics",
    "normalize",
]
