"""
Export Graph Resolver.

Follows every export of a root module down to the module that defines it.

Resolution rules:
    - Named/default re-exports of external packages are terminal; external
      modules are never descended into.
    - Named/default re-exports of internal modules are traced through the
      target's definitions, then its named re-exports (flattening rename
      chains), then its wildcards.
    - Internal wildcards are replaced by the fully resolved export surface
      of their target (never including `default`); external wildcards are
      passed through unexpanded.

Module analyses are cached per canonical path for the lifetime of the
resolver, so every file is parsed at most once per run.
"""

import logging
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Set, Tuple

from ..config import UnbarrelConfig
from ..core.errors import AmbiguousReExportError, UnresolvedExportError
from ..core.imports import is_internal_module
from ..core.path_resolver import PathResolver
from ..core.types import (
    DEFAULT_EXPORT_NAME,
    ExportDefinition,
    ExportGroup,
    ExportKind,
    ModuleExports,
    ReExportEdge,
    ResolvedExport,
)
from ..parsing.typescript.analyzer import ModuleAnalyzer

logger = logging.getLogger(__name__)

WILDCARD_NAME = "*"

# (module, name) pairs visited while tracing one export
Chain = Tuple[Tuple[Path, str], ...]


def merge_exports(collected: Iterable[Tuple[ResolvedExport, bool]]) -> List[ResolvedExport]:
    """
    Deduplicate resolved exports of one module, keeping first-discovery order.

    `collected` pairs each export with a flag telling whether it was pulled in
    through a wildcard. Explicitly exported names shadow wildcard-provided
    ones wherever they appear. A later duplicate is dropped unless it
    differs only in `type_only`, in which case the value export wins; this
    also holds for a shadowed wildcard value of the same symbol.
    """
    collected = list(collected)
    explicit: Dict[str, ResolvedExport] = {}
    for export, via_wildcard in collected:
        if not via_wildcard and export.kind != ExportKind.WILDCARD:
            explicit.setdefault(export.exported_name, export)

    merged: List[ResolvedExport] = []
    index_by_key: Dict[Tuple[str, str], int] = {}
    promoted: Set[str] = set()

    for export, via_wildcard in collected:
        if export.kind == ExportKind.WILDCARD:
            key = (WILDCARD_NAME, export.origin_module)
        else:
            shadowing = explicit.get(export.exported_name) if via_wildcard else None
            if shadowing is not None:
                if not export.type_only and shadowing.differs_only_in_type(export):
                    promoted.add(export.exported_name)
                logger.debug(f"'{export.exported_name}' from {export.origin_module} shadowed by explicit export")
                continue
            key = ("", export.exported_name)

        index = index_by_key.get(key)
        if index is None:
            index_by_key[key] = len(merged)
            merged.append(export)
            continue

        existing = merged[index]
        if existing.differs_only_in_type(export):
            merged[index] = existing.model_copy(update={"type_only": False})
        elif existing != export:
            logger.debug(
                f"Dropping duplicate export '{export.exported_name}' from {export.origin_module} "
                f"(already exported from {existing.origin_module})"
            )

    for index, export in enumerate(merged):
        if export.type_only and export.exported_name in promoted and export.kind == ExportKind.NAMED:
            merged[index] = export.model_copy(update={"type_only": False})

    return merged


def group_exports(exports: Iterable[ResolvedExport]) -> List[ExportGroup]:
    """
    Group resolved exports into one group per origin module.

    Groups are ordered by first reference. External wildcards and namespace
    re-exports cannot share a statement and get a group each.
    """
    groups: Dict[Tuple[str, ...], ExportGroup] = {}

    for export in exports:
        if export.kind == ExportKind.NAMED:
            key = (ExportKind.NAMED, export.origin_module)
        else:
            key = (export.kind, export.origin_module, export.exported_name)

        group = groups.get(key)
        if group is None:
            group = ExportGroup(
                origin_module=export.origin_module,
                external=export.external,
                kind=export.kind,
            )
            groups[key] = group
        group.exports.append(export)

    return list(groups.values())


class ExportGraphResolver:
    """
    Resolves a module's export surface to defining modules.

    Attributes:
        config: Run settings (probe extensions, depth limit).
        analyzer: Produces ModuleExports for a file.
        path_resolver: Resolves specifiers to canonical paths.

    Example:
        ```python
        resolver = ExportGraphResolver()
        for group in resolver.resolve_root(Path("/repo/src/index.ts")):
            print(group.origin_module, [e.exported_name for e in group.exports])
        ```
    """

    def __init__(
        self,
        analyzer: ModuleAnalyzer | None = None,
        path_resolver: PathResolver | None = None,
        config: UnbarrelConfig | None = None,
    ):
        self.config = config or UnbarrelConfig()
        self.analyzer = analyzer or ModuleAnalyzer()
        self.path_resolver = path_resolver or PathResolver(self.config)
        self._cache: Dict[Path, ModuleExports] = {}

    def exports_of(self, module: Path) -> ModuleExports:
        """Analyze a module, at most once per resolver."""
        exports = self._cache.get(module)
        if exports is None:
            exports = self.analyzer.analyze(module)
            self._cache[module] = exports
        else:
            logger.debug(f"Cache hit for {module}")
        return exports

    @property
    def modules_analyzed(self) -> int:
        return len(self._cache)

    def prime(self, module: Path, exports: ModuleExports) -> None:
        """Seed the cache with an analysis done elsewhere."""
        self._cache[module] = exports

    def resolve_root(self, root: Path) -> List[ExportGroup]:
        """Resolve and group the exports of `root`."""
        return group_exports(self.resolve_exports(root))

    def resolve_exports(self, root: Path) -> List[ResolvedExport]:
        """Resolved, merged (ungrouped) exports of `root` in discovery order."""
        root = root.resolve()
        logger.debug(f"Resolving exports of {root}")
        return self._surface(root, frozenset(), include_default=True)

    # ------------------------------------------------------------------
    # Module surfaces
    # ------------------------------------------------------------------

    def _surface(self, module: Path, visiting: FrozenSet[Path], include_default: bool) -> List[ResolvedExport]:
        if len(visiting) >= self.config.max_depth:
            raise AmbiguousReExportError(module, WILDCARD_NAME, reason="wildcard chain too deep")

        exports = self.exports_of(module)
        visiting = visiting | {module}
        collected: List[Tuple[ResolvedExport, bool]] = []

        for item in exports.items():
            if isinstance(item, ExportDefinition):
                if include_default or item.kind != ExportKind.DEFAULT:
                    collected.append((self._local(module, item), False))
                continue

            match item.kind:
                case ExportKind.WILDCARD:
                    collected.extend((r, True) for r in self._expand_wildcard(module, item, visiting))
                case ExportKind.NAMESPACE:
                    collected.append((self._namespace(module, item), False))
                case _:
                    if include_default or item.exported_name != DEFAULT_EXPORT_NAME:
                        collected.append((self.follow(module, item), False))

        return merge_exports(collected)

    def _expand_wildcard(self, module: Path, edge: ReExportEdge, visiting: FrozenSet[Path]) -> List[ResolvedExport]:
        if not is_internal_module(edge.specifier):
            return [ResolvedExport(
                exported_name=WILDCARD_NAME,
                origin_module=edge.specifier,
                origin_name=WILDCARD_NAME,
                type_only=edge.type_only,
                kind=ExportKind.WILDCARD,
                external=True,
            )]

        target = self.path_resolver.resolve(edge.specifier, module.parent)
        if target in visiting:
            logger.debug(f"Wildcard cycle {module} -> {target}, skipping")
            return []

        surface = self._surface(target, visiting, include_default=False)
        if edge.type_only:
            surface = [r.model_copy(update={"type_only": True}) for r in surface]
        return surface

    @staticmethod
    def _local(module: Path, definition: ExportDefinition) -> ResolvedExport:
        name = definition.export_name
        return ResolvedExport(
            exported_name=name,
            origin_module=str(module),
            origin_name=name,
            type_only=definition.type_only,
            local_name=definition.local_name,
            inline=definition.local_name is None,
        )

    def _namespace(self, module: Path, edge: ReExportEdge, type_only: bool = False) -> ResolvedExport:
        external = not is_internal_module(edge.specifier)
        origin = edge.specifier if external else str(self.path_resolver.resolve(edge.specifier, module.parent))
        return ResolvedExport(
            exported_name=edge.exported_name,
            origin_module=origin,
            origin_name=WILDCARD_NAME,
            type_only=type_only or edge.type_only,
            kind=ExportKind.NAMESPACE,
            external=external,
        )

    # ------------------------------------------------------------------
    # Name tracing
    # ------------------------------------------------------------------

    def follow(self, module: Path, edge: ReExportEdge) -> ResolvedExport:
        """Resolve a named or default re-export edge of `module` to its origin."""
        if not is_internal_module(edge.specifier):
            return ResolvedExport(
                exported_name=edge.exported_name,
                origin_module=edge.specifier,
                origin_name=edge.imported_name,
                type_only=edge.type_only,
                external=True,
            )

        target = self.path_resolver.resolve(edge.specifier, module.parent)
        found = self._trace(target, edge.imported_name, edge.type_only, chain=((module, edge.exported_name),))
        if found is None:
            raise UnresolvedExportError(target, [edge.imported_name])
        return found.model_copy(update={"exported_name": edge.exported_name})

    def _trace(self, module: Path, name: str, type_only: bool, chain: Chain) -> ResolvedExport | None:
        """
        Find where `module` gets the export `name` from.

        Returns None when the module does not export the name at all.
        """
        key = (module, name)
        if key in chain:
            raise AmbiguousReExportError(module, name, [(str(m), n) for m, n in chain])
        if len(chain) >= self.config.max_depth:
            raise AmbiguousReExportError(
                module, name, [(str(m), n) for m, n in chain], reason="re-export chain too deep",
            )
        chain = chain + (key,)
        exports = self.exports_of(module)

        definitions = exports.find_definitions(name)
        if definitions:
            # Named re-exports keep the type modifiers written along the
            # chain; the definition's own kind is not consulted
            definition = next((d for d in definitions if not d.type_only), definitions[0])
            logger.debug(f"'{name}' defined in {module}")
            return ResolvedExport(
                exported_name=name,
                origin_module=str(module),
                origin_name=name,
                type_only=type_only,
                local_name=definition.local_name or definition.name,
            )

        edge = exports.find_re_export(name)
        if edge is not None:
            type_only = type_only or edge.type_only
            if edge.kind == ExportKind.NAMESPACE:
                return self._namespace(module, edge, type_only).model_copy(update={"exported_name": name})
            if not is_internal_module(edge.specifier):
                return ResolvedExport(
                    exported_name=name,
                    origin_module=edge.specifier,
                    origin_name=edge.imported_name,
                    type_only=type_only,
                    external=True,
                )
            target = self.path_resolver.resolve(edge.specifier, module.parent)
            logger.debug(f"'{name}' in {module} -> '{edge.imported_name}' in {target}")
            found = self._trace(target, edge.imported_name, type_only, chain)
            if found is None:
                raise UnresolvedExportError(target, [edge.imported_name])
            return found

        # `export *` never forwards the default export
        if name == DEFAULT_EXPORT_NAME:
            return None

        external_wildcards: List[ReExportEdge] = []
        for wildcard in exports.wildcards():
            if not is_internal_module(wildcard.specifier):
                external_wildcards.append(wildcard)
                continue
            target = self.path_resolver.resolve(wildcard.specifier, module.parent)
            if (target, name) in chain:
                continue
            found = self._trace(target, name, type_only or wildcard.type_only, chain)
            if found is not None:
                return found

        if len(external_wildcards) == 1:
            wildcard = external_wildcards[0]
            return ResolvedExport(
                exported_name=name,
                origin_module=wildcard.specifier,
                origin_name=name,
                type_only=type_only or wildcard.type_only,
                external=True,
            )
        if len(external_wildcards) > 1:
            raise AmbiguousReExportError(
                module, name, [(str(m), n) for m, n in chain],
                reason="export provided by several external wildcards",
            )
        return None
