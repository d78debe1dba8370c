"""Service factory.

Provides :func:`service_factory`, the single entry-point for creating the
certificate and DNS service clients. Instances are cached per config so a
warm Lambda container reuses its boto3 clients, and ``@overload``
signatures give callers a typed result.
"""

from typing import overload, Literal, Any

from certsync.base import CertificateBlueprint, DNSBlueprint, existing_services
from certsync.base.client_cache import ClientCache
from certsync.base.config import AWSConfig
from certsync.aws.factory import SERVICE_REGISTRY


@overload
def service_factory(
    service_name: Literal["certificates"], config: dict | None = None
) -> CertificateBlueprint: ...


@overload
def service_factory(
    service_name: Literal["dns"], config: dict | None = None
) -> DNSBlueprint: ...


def service_factory(
    service_name: existing_services,
    config: dict | None = None,
) -> Any:
    """
    Create (or reuse) a service instance.
    Args:
        service_name: The name of the service ('certificates' or 'dns').
        config: AWS configuration dictionary; empty falls back to the
            environment and boto3's credential chain.
    Returns:
        An instance of the requested service class.
    Raises:
        ValueError: If the service is not supported.
        pydantic.ValidationError: If the config is invalid.
    """
    if service_name not in SERVICE_REGISTRY:
        raise ValueError(f"Unsupported service '{service_name}'")

    service_class = SERVICE_REGISTRY[service_name]
    config = dict(config or {})
    return ClientCache().get_or_create(
        service_name,
        config,
        lambda cfg: service_class(AWSConfig(**cfg)),
    )
