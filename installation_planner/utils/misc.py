import importlib.util
import sys
from pathlib import Path
from typing import Iterator, Optional


def incrf(start: int = 1) -> Iterator[int]:
    """Infinite counter used to hand out monotonic ids."""
    value = start
    while True:
        yield value
        value += 1


def load_module(script_path: Path, module_name: Optional[str] = None):
    script_path = Path(script_path)
    if module_name is None:
        module_name = script_path.stem
    spec = importlib.util.spec_from_file_location(module_name, str(script_path))
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module
