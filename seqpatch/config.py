"""Configuration for computing change lists."""

from dataclasses import dataclass

# Backend used when neither the caller nor a PatchConfig names one.
DEFAULT_BACKEND = "diff"


@dataclass(frozen=True)
class PatchConfig:
    """Defaults for `compute_changes`.

    Attributes:
        backend: Registered backend name ("diff", "lcs" or "wu").
        fuse: Fuse adjacent remove/insert pairs into Update changes.
    """

    backend: str = DEFAULT_BACKEND
    fuse: bool = True
