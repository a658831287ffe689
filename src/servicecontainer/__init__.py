"""Minimal service container.

This package provides a small key-based service container for Python, allowing
storage of values, lazy factory bindings (optionally shared), key prefixing
through namespaces and grouping of bindings in providers.

Exports:
- `Container`: Main container holding values, bindings and keyed providers.
- `Namespace`: View over a container that prefixes every key with `basename.`.
  Namespaces nest: `container.namespace("a").namespace("b")` prefixes with `a.b.`.
- `Provider`: Base class for grouped registrations; override `register()`.
- `Registry`: Protocol implemented by both `Container` and `Namespace`.
"""

from ._container import Container, Namespace, Provider, Registry
from ._errors import (
    ContainerError,
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


__all__ = [
    "Container",
    "ContainerError",
    "FactoryReturnedUndefinedError",
    "InvalidContainerError",
    "InvalidKeyError",
    "InvalidNamespaceError",
    "MustOverrideError",
    "Namespace",
    "NoBindingError",
    "NotAProviderError",
    "NotCallableError",
    "Provider",
    "Registry",
    "UndefinedValueError",
]
