"""
adfsat/core/registry.py
=======================
Component registry — maps semantics names to reasoner classes so
callers (and third parties) can select or add semantics without
modifying core code.

Pattern: Registry.register("admissible", AdmissibleReasoner, category="semantics")
         Registry.get("admissible", category="semantics") → AdmissibleReasoner
"""
from __future__ import annotations
from typing import Any, Dict, List
import logging

logger = logging.getLogger(__name__)


class Registry:
    """Named components grouped by category.

    Usage:
        @Registry.decorator("stable", category="semantics")
        class StableReasoner(Reasoner): ...

        cls = Registry.get("stable", category="semantics")
        reasoner = cls(adf)
    """
    _store: Dict[str, Dict[str, Any]] = {}    # category → {name → component}

    @classmethod
    def register(
        cls,
        name:      str,
        component: Any,
        category:  str = "default",
        override:  bool = False,
    ) -> None:
        if not name:
            raise ValueError("Component name must be non-empty.")
        entries = cls._store.setdefault(category, {})
        if name in entries and entries[name] is not component and not override:
            raise KeyError(
                f"'{name}' is already registered as {category} "
                f"({entries[name].__name__}). Pass override=True to replace it."
            )
        entries[name] = component
        logger.debug("Registered %s '%s' → %s", category, name, getattr(component, "__name__", component))

    @classmethod
    def unregister(cls, name: str, category: str = "default") -> None:
        """Remove ``name``; unknown names are ignored."""
        cls._store.get(category, {}).pop(name, None)

    @classmethod
    def get(cls, name: str, category: str = "default") -> Any:
        entries = cls._store.get(category, {})
        if name not in entries:
            raise KeyError(
                f"No {category} registered as '{name}'. "
                f"Available: {sorted(entries)}"
            )
        return entries[name]

    @classmethod
    def names(cls, category: str = "default") -> List[str]:
        return sorted(cls._store.get(category, {}))

    @classmethod
    def decorator(cls, name: str, category: str = "default"):
        """Use as decorator: @Registry.decorator('preferred', category='semantics')"""
        def _register(component):
            cls.register(name, component, category=category)
            return component
        return _register
