import importlib.util
import sys
from pathlib import Path


def load_module(script_path: Path, module_name: str = "module"):
    script_path = Path(script_path)
    search_locations = None
    if script_path.name == "__init__.py":
        search_locations = [str(script_path.parent)]
    spec = importlib.util.spec_from_file_location(
        module_name, str(script_path), submodule_search_locations=search_locations
    )
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module
