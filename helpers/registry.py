"""Named helper registry.

A host templating engine looks helpers up by name and calls them with the
positional parameters of a template expression. This module keeps that
mapping, renders helper results to strings, and discovers user helpers
defined in Python helper files.
"""

import importlib.util
import inspect
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from helpers import builtin


logger = logging.getLogger(__name__)

Helper = Callable[..., Any]

BUILTIN_HELPERS: Dict[str, Helper] = {
    'upper': builtin.upper,
    'repeat': builtin.repeat,
    'wrap': builtin.wrap,
    'replaceRegex': builtin.replace_regex,
    'tableRegex': builtin.table_regex,
}


class HelperError(Exception):
    """Base exception for helper registry failures."""

    def __init__(self, message: str, name: Optional[str] = None):
        """Initialize the error.

        Args:
            message: Error description.
            name: The helper name or file path concerned, if any.
        """
        self.name = name
        super().__init__(message)


class HelperNotFoundError(HelperError):
    """Exception raised when no helper is registered under a name."""
    pass


class HelperRegistrationError(HelperError):
    """Exception raised when a helper cannot be registered."""
    pass


class HelperLoadError(HelperError):
    """Exception raised when a helper file cannot be loaded."""
    pass


class HelperCallError(HelperError):
    """Exception raised when a helper fails during a call."""
    pass


def render_result(result: Any) -> str:
    """Render a helper return value as template output.

    Args:
        result: Value returned by a helper.

    Returns:
        Strings unchanged, None as empty, containers as compact JSON,
        anything else through ``str``.
    """
    if isinstance(result, str):
        return result
    if result is None:
        return ''
    if isinstance(result, (dict, list, tuple)):
        try:
            return json.dumps(result, separators=(',', ':'), default=str)
        except (TypeError, ValueError) as e:
            logger.debug(f"Result not JSON serializable, using str(): {e}")
    return str(result)


def _import_helper_file(path: Path) -> Any:
    module_name = f"stencil_helpers_{path.stem}_{abs(hash(str(path)))}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise HelperLoadError(f"Not a Python helper file: {path}", str(path))

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        sys.modules.pop(module_name, None)
        raise HelperLoadError(f"Failed to load helper file {path}: {e}", str(path)) from e
    return module


def discover_helpers(module: Any) -> Dict[str, Helper]:
    """Find the helper functions a module defines.

    Honors ``__all__`` when present. Otherwise every public function whose
    definition lives in the module itself is a helper; imported functions
    and names starting with ``_`` are skipped.

    Args:
        module: An imported module.

    Returns:
        Helper functions by name, in definition order.
    """
    exported = getattr(module, '__all__', None)
    found: Dict[str, Helper] = {}

    if exported is not None:
        for name in exported:
            value = getattr(module, name, None)
            if callable(value):
                found[name] = value
            else:
                logger.warning(f"Skipping non-callable export '{name}' in {module.__name__}")
        return found

    for name, value in vars(module).items():
        if name.startswith('_') or not inspect.isfunction(value):
            continue
        if value.__module__ != module.__name__:
            continue
        found[name] = value
    return found


class HelperRegistry:
    """Mapping of helper names to helper callables.

    Example:
        registry = HelperRegistry.with_builtins()
        registry.load_file('my_helpers.py')
        registry.call('repeat', 'abc', 3)  # 'abcabcabc'
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._helpers: Dict[str, Helper] = {}
        self._loaded_files: List[Path] = []

    @classmethod
    def with_builtins(cls) -> 'HelperRegistry':
        """Create a registry holding the built-in helpers.

        Returns:
            HelperRegistry with upper, repeat, wrap, replaceRegex and tableRegex.
        """
        registry = cls()
        for name, func in BUILTIN_HELPERS.items():
            registry.register(name, func)
        return registry

    @property
    def loaded_files(self) -> List[Path]:
        """Helper files loaded so far."""
        return list(self._loaded_files)

    def register(self, name: str, func: Helper) -> None:
        """Register a helper, replacing any helper with the same name.

        Args:
            name: Name used in template expressions.
            func: Callable taking positional parameters.

        Raises:
            HelperRegistrationError: If the name is empty or func is not callable.
        """
        if not isinstance(name, str) or not name.strip():
            raise HelperRegistrationError(f"Invalid helper name: {name!r}", name)
        if not callable(func):
            raise HelperRegistrationError(
                f"Helper '{name}' must be callable, got {type(func).__name__}",
                name,
            )

        if name in self._helpers:
            logger.debug(f"Replacing helper: {name}")
        self._helpers[name] = func

    def unregister(self, name: str) -> None:
        """Remove a helper.

        Raises:
            HelperNotFoundError: If no helper has that name.
        """
        if name not in self._helpers:
            raise HelperNotFoundError(f"Helper '{name}' not found", name)
        del self._helpers[name]

    def get(self, name: str) -> Helper:
        """Look up a helper by name.

        Raises:
            HelperNotFoundError: If no helper has that name.
        """
        try:
            return self._helpers[name]
        except KeyError:
            raise HelperNotFoundError(f"Helper '{name}' not found", name) from None

    def names(self) -> List[str]:
        """Registered helper names in registration order."""
        return list(self._helpers)

    def __contains__(self, name: object) -> bool:
        return name in self._helpers

    def __len__(self) -> int:
        return len(self._helpers)

    def __iter__(self) -> Iterator[str]:
        return iter(self._helpers)

    def call(self, name: str, *params: Any) -> str:
        """Call a helper with template parameters and render its output.

        Args:
            name: Helper name.
            *params: Positional parameters from the template expression.

        Returns:
            The rendered helper result.

        Raises:
            HelperNotFoundError: If no helper has that name.
            HelperCallError: If the helper raises.
        """
        func = self.get(name)
        try:
            result = func(*params)
        except Exception as e:
            raise HelperCallError(f"Helper '{name}': {e}", name) from e
        return render_result(result)

    def load_file(self, path: Union[str, Path]) -> List[str]:
        """Load a Python helper file and register the helpers it defines.

        Args:
            path: Path to a ``.py`` file.

        Returns:
            Names of the registered helpers, in definition order.

        Raises:
            HelperLoadError: If the file is missing or fails to import.
        """
        path = Path(path).expanduser().resolve()
        if not path.is_file():
            raise HelperLoadError(f"Helper file not found: {path}", str(path))

        module = _import_helper_file(path)
        discovered = discover_helpers(module)
        for name, func in discovered.items():
            self.register(name, func)

        self._loaded_files.append(path)
        logger.info(f"Loaded {len(discovered)} helper(s) from {path}")
        return list(discovered)
