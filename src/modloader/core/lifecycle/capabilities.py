from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from modloader.core.dependency.provider import ModInfo

ConfigureFn = Callable[[Mapping[str, Any]], None]
PhaseFn = Callable[[], None]
ListenerFn = Callable[["ModEntry"], None]


def _noop() -> None:
    return None


@dataclass
class ModEntry:
    """One loaded mod together with the lifecycle capabilities it exposes.

    Capabilities are plain optional callables filled once at registration;
    the orchestrator only checks them for ``None``. The entry also satisfies
    ``DependencyProvider`` so the same objects can be ordered and then driven.
    """

    info: ModInfo
    mod: Any = None
    configure: Optional[ConfigureFn] = None
    pre_init: Optional[PhaseFn] = None
    init: Optional[PhaseFn] = None
    mod_initialized: Optional[ListenerFn] = None
    version: Optional[str] = None

    @classmethod
    def register(cls, info: ModInfo, mod: Any) -> "ModEntry":
        """Build an entry for ``mod``, binding whichever lifecycle methods it defines.

        Recognized methods: ``configure(settings)``, ``pre_init()``, ``init()``,
        ``mod_initialized(entry)`` and ``get_version()``.
        """
        version = info.version
        get_version = _bound(mod, "get_version")
        if get_version is not None:
            version = get_version() or version
        return cls(
            info=info,
            mod=mod,
            configure=_bound(mod, "configure"),
            pre_init=_bound(mod, "pre_init"),
            init=_bound(mod, "init"),
            mod_initialized=_bound(mod, "mod_initialized"),
            version=version,
        )

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def settings(self) -> Dict[str, Any]:
        return self.info.settings

    @property
    def requires(self) -> List[str]:
        return self.info.requires

    @property
    def conflicts(self) -> List[str]:
        return self.info.conflicts

    @property
    def before(self) -> List[str]:
        return self.info.before

    @property
    def after(self) -> List[str]:
        return self.info.after

    @property
    def on_demand(self) -> bool:
        return self.info.on_demand

    @property
    def is_new_style(self) -> bool:
        """Mods with a pre-init or init phase are configured before the host init hook."""
        return self.pre_init is not None or self.init is not None

    @property
    def type_name(self) -> str:
        if self.mod is None:
            return self.name
        cls = type(self.mod)
        return f"{cls.__module__}.{cls.__qualname__}"


def _bound(mod: Any, attr: str) -> Optional[Callable[..., Any]]:
    if mod is None:
        return None
    value = getattr(mod, attr, None)
    return value if callable(value) else None


@dataclass
class HostHooks:
    """Host callbacks invoked once per load at fixed points of the lifecycle."""

    host_init: PhaseFn = field(default=_noop)
    pre_init: PhaseFn = field(default=_noop)
    init: PhaseFn = field(default=_noop)


__all__ = ["ModEntry", "HostHooks"]
