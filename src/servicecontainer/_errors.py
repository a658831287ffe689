from __future__ import annotations


class ContainerError(RuntimeError):
    """Base class for every error raised by the container."""


class InvalidKeyError(ContainerError, ValueError):
    pass


class UndefinedValueError(ContainerError, ValueError):
    pass


class NotCallableError(ContainerError, TypeError):
    pass


class NoBindingError(ContainerError, LookupError):
    pass


class FactoryReturnedUndefinedError(ContainerError):
    pass


class NotAProviderError(ContainerError, TypeError):
    pass


class InvalidContainerError(ContainerError, TypeError):
    pass


class InvalidNamespaceError(ContainerError, ValueError):
    pass


class MustOverrideError(ContainerError, NotImplementedError):
    pass
