"""Local development data sources.

While working on a data source locally, point ``GRAMPS_DATA_SOURCES`` at it
and it replaces the installed source with the same namespace:

    GRAMPS_DATA_SOURCES=./xkcd,my_company.sources.numbers gramps dev

Each entry is a dotted module path or a filesystem path to a ``.py`` file or
package directory. The module must expose ``data_source``: a DataSource, a
mapping with DataSource keys, or a zero-argument callable returning either.
"""

from __future__ import annotations

import hashlib
import importlib
import importlib.util
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from types import ModuleType

from gramps.core.exceptions import DataSourceError, DataSourceLoadError
from gramps.core.settings import get_gramps_settings
from gramps.features.graphql.data_source import DataSource, coerce_data_source

logger = logging.getLogger(__name__)

__all__ = ["load_dev_data_sources", "override_local_sources"]

DATA_SOURCE_ATTRIBUTE = "data_source"


def _looks_like_path(entry: str) -> bool:
    return entry.endswith(".py") or "/" in entry or "\\" in entry or entry.startswith(".")


def _import_from_path(path: Path) -> ModuleType:
    if path.is_dir():
        init = path / "__init__.py"
        if not init.is_file():
            raise FileNotFoundError(f"{path} is not a package (no __init__.py)")
        target = init
        search_locations = [str(path)]
    elif path.is_file():
        target = path
        search_locations = None
    else:
        raise FileNotFoundError(f"{path} does not exist")

    # Same-named sources in different directories get distinct modules
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:8]
    module_name = f"gramps_dev_sources.{path.stem}_{digest}"
    spec = importlib.util.spec_from_file_location(
        module_name, target, submodule_search_locations=search_locations
    )
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot create an import spec for {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    return module


def load_data_source(entry: str) -> DataSource:
    """Import one data source from a dotted module path or filesystem path.

    Raises:
        DataSourceLoadError: If the module cannot be imported or does not
            expose a valid data source.
    """
    try:
        if _looks_like_path(entry):
            module = _import_from_path(Path(entry).expanduser().resolve())
        else:
            module = importlib.import_module(entry)
    except Exception as e:
        raise DataSourceLoadError(path=entry, reason=f"{type(e).__name__}: {e}") from e

    exported = getattr(module, DATA_SOURCE_ATTRIBUTE, None)
    if exported is None:
        raise DataSourceLoadError(
            path=entry, reason=f"module does not define '{DATA_SOURCE_ATTRIBUTE}'"
        )
    if callable(exported) and not isinstance(exported, DataSource):
        try:
            exported = exported()
        except Exception as e:
            raise DataSourceLoadError(path=entry, reason=f"{type(e).__name__}: {e}") from e

    try:
        return coerce_data_source(exported)
    except DataSourceError as e:
        raise DataSourceLoadError(path=entry, reason=e.message) from e


def load_dev_data_sources(
    log: logging.Logger = logger, paths: Sequence[str] | None = None
) -> list[DataSource]:
    """Load the data sources listed in GRAMPS_DATA_SOURCES.

    Args:
        log: Logger receiving load messages
        paths: Entries to load instead of the configured ones

    Returns:
        Loaded data sources, in the order listed

    Raises:
        DataSourceLoadError: If any entry fails to load
    """
    entries = list(get_gramps_settings().data_sources if paths is None else paths)

    sources: list[DataSource] = []
    for entry in entries:
        try:
            source = load_data_source(entry)
        except DataSourceLoadError as e:
            log.error("Unable to load data source from %s: %s", entry, e.message)
            raise
        log.info("Loaded dev data source '%s' from %s", source.namespace, entry)
        sources.append(source)
    return sources


def override_local_sources(
    sources: Sequence[DataSource],
    dev_sources: Sequence[DataSource],
    log: logging.Logger = logger,
) -> list[DataSource]:
    """Replace configured sources with dev sources of the same namespace.

    Args:
        sources: Configured data sources
        dev_sources: Local development data sources
        log: Logger receiving override messages

    Returns:
        ``sources`` minus overridden namespaces, followed by ``dev_sources``
    """
    if not dev_sources:
        return list(sources)

    dev_namespaces = {source.namespace for source in dev_sources}
    overridden = [s.namespace for s in sources if s.namespace in dev_namespaces]
    if overridden:
        log.info("Overriding local data sources: %s", ", ".join(overridden))

    return [s for s in sources if s.namespace not in dev_namespaces] + list(dev_sources)
