from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, overload

from ._errors import (
    FactoryReturnedUndefinedError,
    InvalidContainerError,
    InvalidKeyError,
    InvalidNamespaceError,
    MustOverrideError,
    NoBindingError,
    NotAProviderError,
    NotCallableError,
    UndefinedValueError,
)


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable

    Factory = Callable[["Container"], object]


def _is_valid_key(key: object) -> bool:
    return isinstance(key, str) and bool(key)


def _validate_key(key: object, method: str) -> None:
    if not _is_valid_key(key):
        msg = f"Cannot .{method}() without valid key"
        raise InvalidKeyError(msg)


class Registry(Protocol):
    """Key-based surface shared by `Container` and `Namespace`."""

    def get(self, key: str) -> object | None: ...
    def set(self, key: str, value: object = None) -> None: ...
    def instance(self, key: str, value: object = None) -> None: ...
    def bind(self, key: str, factory: Factory, share: bool = False) -> None: ...  # noqa: FBT001, FBT002
    def singleton(self, key: str, factory: Factory) -> None: ...
    def make(self, key: str) -> object: ...
    def register(self, key_or_provider: str | Provider, provider: Provider | None = None) -> None: ...
    def is_shared(self, key: str) -> bool: ...
    def provider(self, key: str) -> Provider | None: ...
    def namespace(self, prefix: str) -> Namespace: ...


@dataclass
class Registration:
    factory: Factory | None = None
    shared: bool = False
    instance: object | None = None  # set() value or cached shared result


class Container:
    """Minimal service container.

    - store values under string keys
    - bind factories, optionally shared (built once, then cached)
    - group bindings in providers
    - prefix keys through namespaces.
    """

    def __init__(self) -> None:
        self._registrations: dict[str, Registration] = {}
        self._providers: dict[str, Provider] = {}
        self._lock = threading.RLock()

    def get(self, key: str) -> object | None:
        """Return the stored value for `key`, building it when only a binding exists.

        Returns None for keys that were never set nor bound.
        """
        _validate_key(key, "get")
        with self._lock:
            reg = self._registrations.get(key)
            if reg is None:
                return None
            if reg.instance is not None:
                return reg.instance
            if reg.factory is not None:
                return self.make(key)
            return None

    def set(self, key: str, value: object = None) -> None:
        _validate_key(key, "set")
        if value is None:
            msg = f"Cannot .set() [{key}] to None"
            raise UndefinedValueError(msg)

        with self._lock:
            reg = self._registrations.setdefault(key, Registration())
            reg.instance = value

    def instance(self, key: str, value: object = None) -> None:
        """Alias of `set`."""
        self.set(key, value)

    def bind(self, key: str, factory: Factory, share: bool = False) -> None:  # noqa: FBT001, FBT002
        """Bind a factory to `key`.

        The factory receives the container as its only argument. Re-binding a key
        drops any instance cached by a previous shared binding.

        Example:
          container.bind("db", lambda c: Database(c.get("db.url")), share=True)

        """
        _validate_key(key, "bind")
        if not callable(factory):
            msg = f"Cannot .bind() [{key}] without callable"
            raise NotCallableError(msg)

        with self._lock:
            self._registrations[key] = Registration(factory=factory, shared=bool(share))
        logger.debug("Bound %r (shared=%s)", key, bool(share))

    def singleton(self, key: str, factory: Factory) -> None:
        self.bind(key, factory, share=True)

    def make(self, key: str) -> object:
        """Invoke the binding for `key` and return its result.

        Shared bindings store the result so later `get`/`make` calls reuse it.
        """
        _validate_key(key, "make")
        with self._lock:
            reg = self._registrations.get(key)
            if reg is None or reg.factory is None:
                msg = f"Cannot .make() [{key}] before .bind()"
                raise NoBindingError(msg)

            if reg.shared and reg.instance is not None:
                return reg.instance

            result = reg.factory(self)
            if result is None:
                msg = f"When trying to .make() [{key}] the binding returned None"
                raise FactoryReturnedUndefinedError(msg)

            if reg.shared:
                logger.debug("Caching shared instance for %r", key)
                self.set(key, result)

            return result

    @overload
    def register(self, key_or_provider: Provider) -> None: ...

    @overload
    def register(self, key_or_provider: str, provider: Provider) -> None: ...

    def register(self, key_or_provider: str | Provider, provider: Provider | None = None) -> None:
        """Register a provider, optionally under a key.

        Example:
          container.register(MailProvider(container))
          container.register("mail", MailProvider(container))

        Only keyed providers can be looked up later with `provider()`.
        """
        key: str | None
        if provider is None and not isinstance(key_or_provider, str):
            # anonymous registration
            key, provider = None, key_or_provider
        else:
            key = key_or_provider  # type: ignore[assignment]
            _validate_key(key, "register")

        if not isinstance(provider, Provider):
            keyed = f" [{key}] " if key else " "
            msg = f"Cannot .register(){keyed}without instance of Provider"
            raise NotAProviderError(msg)

        with self._lock:
            provider.register()
            if key:
                self._providers[key] = provider
        logger.debug("Registered provider %s (key=%r)", type(provider).__name__, key)

    def is_shared(self, key: str) -> bool:
        if not _is_valid_key(key):
            return False
        with self._lock:
            reg = self._registrations.get(key)
            return reg is not None and (reg.instance is not None or reg.shared)

    def provider(self, key: str) -> Provider | None:
        _validate_key(key, "provider")
        return self._providers.get(key)

    def namespace(self, prefix: str) -> Namespace:
        """Create a view over this container that prefixes every key with `prefix.`."""
        return Namespace(self, prefix)


class Namespace:
    """A prefixing view over a `Container`.

    Every `Registry` call is forwarded to the container with its first argument
    rewritten to `basename.key`. Invalid first arguments are forwarded untouched
    so the container reports them.
    """

    def __init__(self, container: Container, namespace: str) -> None:
        if not isinstance(container, Container):
            msg = "Cannot instantiate Namespace without valid Container instance"
            raise InvalidContainerError(msg)
        if not _is_valid_key(namespace):
            msg = "Cannot instantiate Namespace without valid namespace"
            raise InvalidNamespaceError(msg)
        self._container = container
        self._namespace = namespace

    def __repr__(self) -> str:
        return f"Namespace({self._namespace!r})"

    def get_container(self) -> Container:
        return self._container

    def get_namespace(self) -> str:
        return self._namespace

    def get_basename(self) -> str:
        return self._namespace

    def make_key(self, key: object) -> str | None:
        if _is_valid_key(key):
            return f"{self._namespace}.{key}"
        return None

    def _key(self, key: object) -> object:
        namespaced = self.make_key(key)
        return key if namespaced is None else namespaced

    def get(self, key: str) -> object | None:
        return self._container.get(self._key(key))

    def set(self, key: str, value: object = None) -> None:
        self._container.set(self._key(key), value)

    def instance(self, key: str, value: object = None) -> None:
        self._container.instance(self._key(key), value)

    def bind(self, key: str, factory: Factory, share: bool = False) -> None:  # noqa: FBT001, FBT002
        self._container.bind(self._key(key), factory, share)

    def singleton(self, key: str, factory: Factory) -> None:
        self._container.singleton(self._key(key), factory)

    def make(self, key: str) -> object:
        return self._container.make(self._key(key))

    def register(self, key_or_provider: str | Provider, provider: Provider | None = None) -> None:
        self._container.register(self._key(key_or_provider), provider)

    def is_shared(self, key: str) -> bool:
        return self._container.is_shared(self._key(key))

    def provider(self, key: str) -> Provider | None:
        return self._container.provider(self._key(key))

    def namespace(self, prefix: str) -> Namespace:
        return self._container.namespace(self._key(prefix))


class Provider:
    """Groups related bindings behind a single `register()` call.

    Subclasses override `register()` and bind against `get_container()`, or
    against `get_namespace()` when constructed from a `Namespace` to get
    prefixed keys.
    """

    def __init__(self, container: Container | Namespace) -> None:
        self._namespace: Namespace | None = None
        if isinstance(container, Namespace):
            self._namespace = container
            container = container.get_container()
        if not isinstance(container, Container):
            msg = "Cannot instantiate Provider without valid Container instance"
            raise InvalidContainerError(msg)
        self._container = container

    def get_container(self) -> Container:
        return self._container

    def get_namespace(self) -> Namespace | None:
        return self._namespace

    def register(self) -> None:
        msg = "Need to override .register() method"
        raise MustOverrideError(msg)
