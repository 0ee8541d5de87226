from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional, Protocol

from core.index.models import Entity


class ScanProgressCallback(Protocol):
    def __call__(self, current: int, total: int, message: Optional[str]) -> None: ...

class CodebaseScanner(ABC):
    """Interface for scanning a codebase for documented type declarations."""

    @abstractmethod
    def scan(
        self,
        root_dir: Path,
        exclude_tests: bool = True,
        progress_callback: Optional[ScanProgressCallback] = None
    ) -> List[Entity]:
        """Scan and return index entities found in the codebase."""
        pass

    @abstractmethod
    def iter_files(self, root_dir: Path, exclude_tests: bool = True) -> Iterable[Path]:
        """Yield source files found in the codebase."""
        pass
